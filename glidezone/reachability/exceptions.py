# glidezone/reachability/exceptions.py
"""
Reachability Engine Exceptions
Standardized error types for envelope construction and zone compositing
"""

class ReachabilityError(Exception):
    """Base class for all reachability engine errors"""
    pass

class MissingPerformanceDataError(ReachabilityError):
    """Performance data required for a request is missing or malformed"""
    def __init__(self, item, aircraft_id=None, location_id=None, message="Missing performance data"):
        self.item = item
        self.aircraft_id = aircraft_id
        self.location_id = location_id
        context = ", ".join(
            f"{name}={value}" for name, value in (("aircraft", aircraft_id), ("location", location_id))
            if value is not None
        )
        super().__init__(f"{message}: {item} [{context}]" if context else f"{message}: {item}")

class DegenerateGeometryError(ReachabilityError):
    """The geometry kernel produced an invalid or empty shape where an area was expected"""
    def __init__(self, operation, detail="", message="Degenerate geometry"):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{message} in {operation}: {detail}" if detail else f"{message} in {operation}")

class CatalogError(ReachabilityError):
    """Failed to read or parse the aircraft/location catalog"""
    def __init__(self, source, detail, message="Catalog error"):
        self.source = source
        self.detail = detail
        super().__init__(f"{message} [{source}]: {detail}")

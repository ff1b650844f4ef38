"""
Domain errors raised by the calculation engine, repository and report service.

Every error carries a stable ``code`` plus structured detail so the HTTP layer
can render a specific message instead of a generic failure.
"""
from typing import Any, Dict, List, Optional


class ROIError(Exception):
    """Base class for all domain errors."""

    code = "roi_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": self.message}


class ValidationError(ROIError):
    """Malformed or out-of-domain input."""

    code = "validation_error"

    def __init__(self, fields: List[Dict[str, Any]], message: Optional[str] = None):
        self.fields = fields
        if message is None:
            names = ", ".join(str(f.get("field")) for f in fields) or "input"
            message = f"Invalid value for: {names}"
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str, value: Any = None) -> "ValidationError":
        return cls([{"field": field, "message": message, "value": value}])

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "fields": self.fields}


class DuplicateNameError(ROIError):
    """A scenario with this name already exists."""

    code = "duplicate_name"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Scenario name '{name}' is already in use")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "field": "name", "value": self.name}


class NotFoundError(ROIError):
    """Reference to a scenario or report that does not exist."""

    code = "not_found"

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource.capitalize()} '{resource_id}' not found")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "resource": self.resource, "id": self.resource_id}


class DivisionUndefined(ROIError):
    """A ratio metric has a zero denominator."""

    code = "division_undefined"

    def __init__(self, metric: str):
        self.metric = metric
        super().__init__(f"{metric} is undefined: denominator is zero")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "metric": self.metric}

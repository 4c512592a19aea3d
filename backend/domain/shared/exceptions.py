"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent business rule violations.
"""

from typing import Optional, Any, Dict, List


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationException(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None}
        )


class ScheduleFormatException(DomainException):
    """Raised when an MRP demand schedule holds non-integer offsets or demands."""

    def __init__(
        self,
        position: int,
        field: str,
        value: Any,
        message: str = "Offsets and demands must be integers."
    ):
        super().__init__(
            message=message,
            code="INVALID_SCHEDULE",
            details={"position": position, "field": field, "value": str(value)}
        )


# =============================================================================
# BOM VALIDATION
# =============================================================================

class BOMValidationException(DomainException):
    """Base class for structural BOM violations found on the graph form."""


class EmptyBOMException(BOMValidationException):
    """Raised when a BOM graph holds no component at all."""

    def __init__(self):
        super().__init__(
            message="The BOM contains no component.",
            code="EMPTY_BOM",
        )


class CircularReferenceException(BOMValidationException):
    """Raised when a circular reference is detected in BOM structure."""

    def __init__(
        self,
        path: List[str],
        code: str = "CIRCULAR_REFERENCE",
        message: Optional[str] = None
    ):
        if message is None and path:
            message = (
                f"Cycle detected: {' -> '.join(path)}. A component cannot be "
                f"(directly or indirectly) its own sub-component."
            )
        elif message is None:
            message = "A component is directly or indirectly part of its own composition."
        super().__init__(
            message=message,
            code=code,
            details={"path": list(path)}
        )


class SelfReferenceException(CircularReferenceException):
    """Raised when a component is declared as its own direct sub-component."""

    def __init__(self, component_name: str):
        super().__init__(
            [component_name, component_name],
            code="SELF_REFERENCE",
            message=f'Component "{component_name}" cannot be its own sub-component.'
        )
        self.details["component"] = component_name


class RootCountException(BOMValidationException):
    """Raised when the graph does not have exactly one finished product."""

    def __init__(self, count: int):
        super().__init__(
            message=f"There must be exactly one finished product (root), found: {count}.",
            code="ROOT_COUNT",
            details={"count": count}
        )


class MultipleParentsException(BOMValidationException):
    """Raised when a non-root node does not have exactly one parent."""

    def __init__(self, component_name: str, count: int):
        super().__init__(
            message=(
                f'Component "{component_name}" must have exactly one parent '
                f"(found {count})."
            ),
            code="PARENT_COUNT",
            details={"component": component_name, "count": count}
        )


class InconsistentStructureException(BOMValidationException):
    """Raised when a component name appears with different children sets."""

    def __init__(self, component_name: str):
        super().__init__(
            message=(
                f'Component "{component_name}" appears with different '
                f"sub-components at different places in the BOM."
            ),
            code="INCONSISTENT_STRUCTURE",
            details={"component": component_name}
        )


class DuplicateSiblingException(BOMValidationException):
    """Raised when the same component appears twice under one parent."""

    def __init__(self, component_name: str):
        super().__init__(
            message=(
                f'Component "{component_name}" is present several times under the '
                f"same parent. Merge it into a single node with the total quantity."
            ),
            code="DUPLICATE_SIBLING",
            details={"component": component_name}
        )


class UnconnectedComponentsException(BOMValidationException):
    """Raised when several components exist without any link between them."""

    def __init__(self, count: int):
        super().__init__(
            message="Multiple unconnected components.",
            code="UNCONNECTED_COMPONENTS",
            details={"count": count}
        )


class OrphanComponentException(BOMValidationException):
    """Raised when a node is not linked to any other node."""

    def __init__(self, component_name: str):
        super().__init__(
            message=f'Component "{component_name}" is not linked to any other component in the BOM.',
            code="ORPHAN_COMPONENT",
            details={"component": component_name}
        )

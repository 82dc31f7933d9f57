"""Domain error → GraphQL error translation.

Queries raise GraphQLError with the error code in ``extensions``;
mutations return an OperationError payload instead.
"""

from typing import Any, Dict

from graphql import GraphQLError

from domain.shared.errors import WorkflowError
from graphql_api.types_diet_chart_mutations import FieldError, OperationError


def to_graphql_error(error: WorkflowError) -> GraphQLError:
    """Build a GraphQLError carrying ``code`` (and ``fields`` when present)."""
    extensions: Dict[str, Any] = {"code": error.code}
    fields = getattr(error, "fields", None)
    if fields:
        extensions["fields"] = dict(fields)
    return GraphQLError(str(error), extensions=extensions)


def to_operation_error(error: WorkflowError) -> OperationError:
    """Build the OperationError member of a mutation result union."""
    fields = getattr(error, "fields", None) or {}
    return OperationError(
        code=error.code,
        message=str(error),
        fields=[FieldError(field=name, message=message) for name, message in sorted(fields.items())],
    )

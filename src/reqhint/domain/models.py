from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator

Protocol = Literal["rest", "graphql"]
OperationKind = Literal["query", "mutation", "subscription"]

WILDCARD_ORIGIN = "*"


class RequestDescriptor(BaseModel):
    """
    Comparable view of a request that no handler matched.

    `method` and `path` describe the transport for both protocols
    (for GraphQL: typically POST and the endpoint path, e.g. /graphql).
    The operation fields exist only for GraphQL.
    """

    model_config = ConfigDict(frozen=True)

    protocol: Protocol
    method: str
    path: str
    operation_kind: Optional[OperationKind] = None
    operation_name: Optional[str] = None

    @model_validator(mode="after")
    def _check_protocol_fields(self) -> "RequestDescriptor":
        if self.protocol == "rest":
            if self.operation_kind is not None or self.operation_name is not None:
                raise ValueError("REST request cannot carry GraphQL operation fields")
        else:
            if self.operation_kind is None or self.operation_name is None:
                raise ValueError("GraphQL request requires operation_kind and operation_name")
        return self

    @property
    def compared_value(self) -> str:
        # the only field that takes part in similarity scoring
        if self.protocol == "graphql":
            return self.operation_name or ""
        return self.path


class HandlerDescriptor(BaseModel):
    """
    Comparable view of one registered handler.

    REST handlers carry method + path, GraphQL handlers carry
    operation_kind + operation_name. Never both.
    """

    model_config = ConfigDict(frozen=True)

    protocol: Protocol
    method: Optional[str] = None
    path: Optional[str] = None
    operation_kind: Optional[OperationKind] = None
    operation_name: Optional[str] = None
    origin: str = WILDCARD_ORIGIN

    @model_validator(mode="after")
    def _check_protocol_fields(self) -> "HandlerDescriptor":
        rest_fields = (self.method, self.path)
        graphql_fields = (self.operation_kind, self.operation_name)

        if self.protocol == "rest":
            if any(f is not None for f in graphql_fields):
                raise ValueError("REST handler cannot carry GraphQL operation fields")
            if any(f is None for f in rest_fields):
                raise ValueError("REST handler requires method and path")
        else:
            if any(f is not None for f in rest_fields):
                raise ValueError("GraphQL handler cannot carry method or path")
            if any(f is None for f in graphql_fields):
                raise ValueError("GraphQL handler requires operation_kind and operation_name")
        return self

    @property
    def compared_value(self) -> str:
        if self.protocol == "graphql":
            return self.operation_name or ""
        return self.path or ""

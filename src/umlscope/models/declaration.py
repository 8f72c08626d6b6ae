"""
Resolved Declaration Model - Output of Parsing and Symbol Resolution.

These records describe one declared type per source file with every
referenced name already resolved to its fully-qualified form where
possible. They are the only input the relationship extractor consumes.

A reference that could not be resolved carries ``None`` in its resolved
slot; a reference whose resolution raised carries the failure message in
``error``. Neither is fatal: the extractor logs and skips it.

Example:
    # For this Java code:
    # package com.app;
    # public class OrderService extends BaseService {
    #     private OrderRepository repository;
    #     public void place(Order order) { repository.save(order); }
    # }

    declaration = ResolvedDeclaration(
        name="com.app.OrderService",
        supertypes=[TypeReference("BaseService", "com.app.BaseService")],
        fields=[ResolvedField("repository", "OrderRepository",
                              "com.app.OrderRepository", "private")],
        methods=[ResolvedMethod(
            name="place",
            return_type="void",
            visibility="public",
            parameter_types=["Order"],
            calls=[CallExpression("save", "com.app.OrderRepository")],
        )],
    )
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TypeReference:
    """
    A type name as written in source plus its resolution.

    Attributes:
        raw: The type as written (e.g., "List<Order>", "BaseService")
        resolved: Fully-qualified name, or None if unresolved
        error: Resolution failure message, if resolution raised
    """

    raw: str
    resolved: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved is not None and self.error is None


@dataclass
class CallExpression:
    """
    A method-call expression found in a method body.

    Attributes:
        method_name: Name of the called method
        receiver_type: Fully-qualified type of the receiver, or None when the
                       call has no receiver or it could not be resolved
        error: Resolution failure message, if resolution raised
        line: 1-based source line of the call
    """

    method_name: str
    receiver_type: Optional[str] = None
    error: Optional[str] = None
    line: int = 0


@dataclass
class FieldAccessExpression:
    """A field-access expression (``scope.field``) found in a method body."""

    field_name: str
    owner_type: Optional[str] = None
    error: Optional[str] = None
    line: int = 0


@dataclass
class ResolvedMethod:
    """A declared method with the expressions found in its body."""

    name: str
    return_type: str = "void"
    visibility: str = ""
    parameter_types: list[str] = field(default_factory=list)
    calls: list[CallExpression] = field(default_factory=list)
    field_accesses: list[FieldAccessExpression] = field(default_factory=list)


@dataclass
class ResolvedField:
    """A declared field; ``resolved_type`` is None for primitives or unknowns."""

    name: str
    type_name: str
    resolved_type: Optional[str] = None
    visibility: str = ""
    error: Optional[str] = None


@dataclass
class ResolvedDeclaration:
    """
    One declared class, interface or enum with resolved references.

    Attributes:
        name: Fully-qualified name of the declared type
        kind: "class", "interface" or "enum"
        supertypes: Extended types (classes, or interfaces of an interface)
        interfaces: Interfaces implemented by a class or enum
        methods: Declared methods
        fields: Declared fields
        file_path: Source file the declaration was read from
    """

    name: str
    kind: str = "class"
    supertypes: list[TypeReference] = field(default_factory=list)
    interfaces: list[TypeReference] = field(default_factory=list)
    methods: list[ResolvedMethod] = field(default_factory=list)
    fields: list[ResolvedField] = field(default_factory=list)
    file_path: Optional[str] = None

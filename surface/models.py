"""
Data models for the extracted public surface of a crate.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ExtractedField:
    """A named, typed slot: a const, a struct field or a parameter."""

    name: str
    type_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type_text}


@dataclass
class ExtractedFunction:
    """A free function, method, trait method or exported-macro stub.

    Attributes:
        name: Function identifier.
        type_params: Type parameter names in declaration order.
        params: Parameters, receivers included.
        return_type: Canonical return type text (``()`` when omitted).
    """

    name: str
    type_params: List[str]
    params: List[ExtractedField]
    return_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "typeParams": list(self.type_params),
            "params": [p.to_dict() for p in self.params],
            "returnType": self.return_type,
        }


@dataclass
class ExtractedStruct:
    name: str
    type_params: List[str]
    fields: List[ExtractedField]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "typeParams": list(self.type_params),
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class ExtractedEnum:
    name: str
    type_params: List[str]
    variants: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "typeParams": list(self.type_params),
            "variants": list(self.variants),
        }


@dataclass
class ExtractedTrait:
    """A public trait.

    Attributes:
        name: Trait identifier.
        type_params: Generic type parameters followed by associated type names.
        super_traits: Supertrait bounds as opaque display strings.
        methods: Required and provided methods.
    """

    name: str
    type_params: List[str]
    super_traits: List[str]
    methods: List[ExtractedFunction]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "typeParams": list(self.type_params),
            "superTraits": list(self.super_traits),
            "methods": [m.to_dict() for m in self.methods],
        }


@dataclass
class PendingMethods:
    """Public methods of one inherent impl block, awaiting merge downstream."""

    target: str
    methods: List[ExtractedFunction]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "methods": [m.to_dict() for m in self.methods],
        }


@dataclass
class SkipIssue:
    """A construct that was skipped because the schema cannot express it.

    Attributes:
        file: Canonical path of the file the construct lives in.
        kind: One of generic, param, struct, enum, trait, impl, macro.
        snippet: Source text of the offending construct.
        reason: Human-readable explanation.
    """

    file: str
    kind: str
    snippet: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "kind": self.kind,
            "snippet": self.snippet,
            "reason": self.reason,
        }


@dataclass
class ModuleRecord:
    """Everything extracted from one module (file or inline ``mod`` block)."""

    file: str
    parts: List[str]
    consts: List[ExtractedField] = field(default_factory=list)
    enums: List[ExtractedEnum] = field(default_factory=list)
    structs: List[ExtractedStruct] = field(default_factory=list)
    traits: List[ExtractedTrait] = field(default_factory=list)
    functions: List[ExtractedFunction] = field(default_factory=list)
    pending_methods: List[PendingMethods] = field(default_factory=list)
    issues: List[SkipIssue] = field(default_factory=list)

    def add_issue(self, kind: str, snippet: str, reason: str) -> None:
        self.issues.append(
            SkipIssue(file=self.file, kind=kind, snippet=snippet, reason=reason)
        )

    @property
    def path_key(self) -> str:
        """Module path in ``a::b`` form; the crate root is the empty string."""
        return "::".join(self.parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "parts": list(self.parts),
            "consts": [c.to_dict() for c in self.consts],
            "enums": [e.to_dict() for e in self.enums],
            "structs": [s.to_dict() for s in self.structs],
            "traits": [t.to_dict() for t in self.traits],
            "functions": [f.to_dict() for f in self.functions],
            "pendingMethods": [p.to_dict() for p in self.pending_methods],
            "issues": [i.to_dict() for i in self.issues],
        }


@dataclass
class ExtractOutput:
    """The complete document: schema tag plus ordered modules."""

    schema: int
    modules: List[ModuleRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": self.schema,
            "modules": [m.to_dict() for m in self.modules],
        }

"""
Output assembly: deterministic ordering, schema tagging and serialization.
"""

import json
import logging
from collections import Counter
from typing import Any, Dict, Iterable, List

from surface.config import SCHEMA_VERSION
from surface.errors import OutputSerializationError, UnsupportedSchemaError
from surface.models import (
    ExtractedEnum,
    ExtractedField,
    ExtractedFunction,
    ExtractedStruct,
    ExtractedTrait,
    ExtractOutput,
    ModuleRecord,
    PendingMethods,
    SkipIssue,
)

logger = logging.getLogger(__name__)


class ExtractionStats:
    """Statistics for an extraction run."""

    def __init__(self):
        self.modules = 0
        self.files = 0
        self.consts = 0
        self.enums = 0
        self.structs = 0
        self.traits = 0
        self.functions = 0
        self.pending_method_groups = 0
        self.issues_by_kind: Counter = Counter()

    @classmethod
    def from_modules(cls, modules: Iterable[ModuleRecord]) -> "ExtractionStats":
        stats = cls()
        files = set()
        for module in modules:
            stats.modules += 1
            files.add(module.file)
            stats.consts += len(module.consts)
            stats.enums += len(module.enums)
            stats.structs += len(module.structs)
            stats.traits += len(module.traits)
            stats.functions += len(module.functions)
            stats.pending_method_groups += len(module.pending_methods)
            stats.issues_by_kind.update(issue.kind for issue in module.issues)
        stats.files = len(files)
        return stats

    @property
    def issues(self) -> int:
        return sum(self.issues_by_kind.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "modules": self.modules,
            "files": self.files,
            "consts": self.consts,
            "enums": self.enums,
            "structs": self.structs,
            "traits": self.traits,
            "functions": self.functions,
            "pending_method_groups": self.pending_method_groups,
            "issues": self.issues,
            "issues_by_kind": dict(sorted(self.issues_by_kind.items())),
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(modules={self.modules}, files={self.files}, "
            f"functions={self.functions}, structs={self.structs}, "
            f"issues={self.issues})"
        )


def sort_modules(modules: Iterable[ModuleRecord]) -> List[ModuleRecord]:
    """Order modules by ``a::b`` path (root first), then by file label.

    Each module's pending method groups are sorted by target name; the sort
    is stable so blocks for the same target keep their source order.
    """
    ordered = sorted(modules, key=lambda m: (m.path_key, m.file))
    for module in ordered:
        module.pending_methods.sort(key=lambda p: p.target)
    return ordered


def assemble_output(modules: Iterable[ModuleRecord]) -> ExtractOutput:
    """Wrap the ordered modules with the schema version tag."""
    ordered = sort_modules(modules)
    logger.info("Assembled %d modules (schema %d)", len(ordered), SCHEMA_VERSION)
    return ExtractOutput(schema=SCHEMA_VERSION, modules=ordered)


def serialize_output(output: ExtractOutput) -> str:
    """Render the document as compact JSON.

    Raises:
        OutputSerializationError: If the document cannot be encoded.
    """
    try:
        return json.dumps(
            output.to_dict(),
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise OutputSerializationError(
            f"Failed to serialize extractor output: {e}"
        ) from e


def _fields(raw: List[Dict[str, Any]]) -> List[ExtractedField]:
    return [ExtractedField(f["name"], f["type"]) for f in raw]


def _function(raw: Dict[str, Any]) -> ExtractedFunction:
    return ExtractedFunction(
        name=raw["name"],
        type_params=list(raw["typeParams"]),
        params=_fields(raw["params"]),
        return_type=raw["returnType"],
    )


def _module(raw: Dict[str, Any]) -> ModuleRecord:
    return ModuleRecord(
        file=raw["file"],
        parts=list(raw["parts"]),
        consts=_fields(raw["consts"]),
        enums=[
            ExtractedEnum(e["name"], list(e["typeParams"]), list(e["variants"]))
            for e in raw["enums"]
        ],
        structs=[
            ExtractedStruct(s["name"], list(s["typeParams"]), _fields(s["fields"]))
            for s in raw["structs"]
        ],
        traits=[
            ExtractedTrait(
                t["name"],
                list(t["typeParams"]),
                list(t["superTraits"]),
                [_function(m) for m in t["methods"]],
            )
            for t in raw["traits"]
        ],
        functions=[_function(f) for f in raw["functions"]],
        pending_methods=[
            PendingMethods(p["target"], [_function(m) for m in p["methods"]])
            for p in raw["pendingMethods"]
        ],
        issues=[
            SkipIssue(i["file"], i["kind"], i["snippet"], i["reason"])
            for i in raw["issues"]
        ],
    )


def load_output(text: str) -> ExtractOutput:
    """Read a document produced by ``serialize_output``.

    Raises:
        UnsupportedSchemaError: If the schema tag is missing or unknown.
        ValueError: If the text is not valid JSON or a record is malformed.
    """
    payload = json.loads(text)
    schema = payload.get("schema") if isinstance(payload, dict) else None
    if schema != SCHEMA_VERSION:
        raise UnsupportedSchemaError(
            f"Unsupported extractor schema {schema!r} (expected {SCHEMA_VERSION})."
        )
    try:
        modules = [_module(m) for m in payload["modules"]]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed extractor output: {e}") from e
    return ExtractOutput(schema=schema, modules=modules)

# src/nlcompiler/core/output.py
"""
Output document assembly and rendering.

build_document() produces one canonical dict; render() turns it into JSON,
an indented key: value text form ("yaml"), or XML.
"""

import json
import re
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from nlcompiler.core.config import COMPILER_VERSION
from nlcompiler.core.memory import ContextMemory
from nlcompiler.core.models import OptimizedGraph, SemanticGraph, Token


FORMATS = ("json", "yaml", "xml")
FORMAT_ALIASES = {"yml": "yaml"}
CONTEXT_WINDOW = 3
LOW_CONFIDENCE = 0.5
LOW_CONFIDENCE_REASON = "Low confidence in parsing"
LOW_CONFIDENCE_SUGGESTIONS = ["Try simpler sentence structure", "Check spelling"]
XML_ROOT = "nlcompiler"


def normalize_format(fmt: str | None) -> str:
    """Map a requested format to one of FORMATS; unknown requests become json."""
    fmt = (fmt or "json").strip().lower()
    fmt = FORMAT_ALIASES.get(fmt, fmt)
    return fmt if fmt in FORMATS else "json"


def build_document(
    text: str,
    tokens: list[Token],
    graph: SemanticGraph,
    optimized: OptimizedGraph,
    memory: ContextMemory,
    fmt: str = "json",
    language: str = "en",
    dictionary_api: str = "dictionaryapi.dev + fallback",
    compilation_time_ms: int = 0,
) -> dict:
    overall = graph.overall_confidence
    low = overall < LOW_CONFIDENCE

    return {
        "metadata": {
            "compiler_version": COMPILER_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source_language": language,
            "target_format": fmt,
            "total_words": len(tokens),
            "dictionary_api": dictionary_api,
            "compilation_time_ms": compilation_time_ms,
            "confidence_score": round(overall, 3),
        },
        "original_text": text,
        "intent": graph.intent.to_dict(),
        "tokens": [t.to_summary() for t in tokens],
        "semantic_structure": graph.to_dict(),
        "knowledge_graph": optimized.to_dict(),
        "context_memory": [e.to_dict() for e in memory.recent(CONTEXT_WINDOW)],
        "summary": {
            "main_subject": graph.main_subject or "N/A",
            "main_action": graph.main_action or "N/A",
            "entity_count": len(graph.entities),
            "relationship_count": len(graph.relationships),
            "confidence": f"{overall * 100:.1f}%",
        },
        "error_handling": {
            "has_errors": low,
            "error_reason": LOW_CONFIDENCE_REASON if low else None,
            "suggestions": list(LOW_CONFIDENCE_SUGGESTIONS) if low else [],
        },
    }


def _scalar(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# === JSON ===

def to_json(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


# === key: value ===

def to_yaml(obj: dict, indent: int = 0) -> str:
    lines = []
    _yaml_lines(obj, indent, lines)
    return "".join(lines)


def _yaml_lines(obj: dict, indent: int, lines: list[str]) -> None:
    spaces = "  " * indent
    for key, value in obj.items():
        if isinstance(value, dict):
            lines.append(f"{spaces}{key}:\n")
            _yaml_lines(value, indent + 1, lines)
        elif isinstance(value, list):
            lines.append(f"{spaces}{key}:\n")
            for item in value:
                if isinstance(item, dict):
                    lines.append(f"{spaces}  -\n")
                    _yaml_lines(item, indent + 2, lines)
                else:
                    lines.append(f"{spaces}  - {_scalar(item)}\n")
        else:
            lines.append(f"{spaces}{key}: {_scalar(value)}\n")


# === XML ===

_UNSAFE_KEY = re.compile(r"[^A-Za-z0-9_]")
# characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def xml_text(value) -> str:
    """Escape a scalar for element text, dropping characters XML cannot carry."""
    return escape(_INVALID_XML_CHARS.sub("", _scalar(value)))


def xml_tag(key) -> str:
    """Sanitize a key into an element name made of [A-Za-z0-9_]."""
    tag = _UNSAFE_KEY.sub("_", str(key))
    if not tag or tag[0].isdigit():
        tag = "_" + tag
    return tag


def to_xml(obj: dict, root: str = XML_ROOT) -> str:
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', f"<{root}>"]
    _xml_lines(obj, 1, lines)
    lines.append(f"</{root}>")
    return "\n".join(lines)


def _xml_value(tag: str, value, indent: int, lines: list[str]) -> None:
    spaces = "  " * indent
    if value is None:
        lines.append(f"{spaces}<{tag}/>")
    elif isinstance(value, dict):
        lines.append(f"{spaces}<{tag}>")
        _xml_lines(value, indent + 1, lines)
        lines.append(f"{spaces}</{tag}>")
    elif isinstance(value, list):
        lines.append(f"{spaces}<{tag}>")
        for item in value:
            _xml_value("item", item, indent + 1, lines)
        lines.append(f"{spaces}</{tag}>")
    else:
        lines.append(f"{spaces}<{tag}>{xml_text(value)}</{tag}>")


def _xml_lines(obj: dict, indent: int, lines: list[str]) -> None:
    for key, value in obj.items():
        _xml_value(xml_tag(key), value, indent, lines)


RENDERERS = {
    "json": to_json,
    "yaml": to_yaml,
    "xml": to_xml,
}


def render(document: dict, fmt: str) -> str:
    return RENDERERS[normalize_format(fmt)](document)

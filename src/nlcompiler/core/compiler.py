# src/nlcompiler/core/compiler.py
"""
Compile entry point.

    lexical → syntax → semantic → ir → optimize → output

A compile call never raises. On success the sentence's subject/action is
appended to the session's context memory; on failure memory is untouched.
Analytics are recorded either way.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field

from nlcompiler.core.config import CompilerConfig
from nlcompiler.core.dictionary import DefinitionResolver
from nlcompiler.core.layers import LayerResult
from nlcompiler.core.layers.runner import ERROR, LayerRunner, PhaseCallback, PhaseStatus
from nlcompiler.core.memory import ContextMemory, Session
from nlcompiler.core.output import LOW_CONFIDENCE, normalize_format
from nlcompiler.core.semantics import context_entry_for

# Import all layers to register them
import nlcompiler.core.layers.lexical
import nlcompiler.core.layers.syntax
import nlcompiler.core.layers.semantic
import nlcompiler.core.layers.ir
import nlcompiler.core.layers.optimize
import nlcompiler.core.layers.output


logger = logging.getLogger(__name__)

PIPELINE = ["lexical", "syntax", "semantic", "ir", "optimize", "output"]


@dataclass
class CompileRequest:
    text: str
    format: str = "json"
    language: str = "en"  # advisory; rules are English-only


@dataclass
class CompileResult:
    success: bool
    format: str
    output: str | None = None
    document: dict | None = None
    phases: list[PhaseStatus] = field(default_factory=list)
    results: dict[str, LayerResult] = field(default_factory=dict)
    error: str | None = None
    duration_ms: float = 0.0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "format": self.format,
            "output": self.output,
            "phases": [p.to_dict() for p in self.phases],
            "error": self.error,
            "duration_ms": self.duration_ms,
        }


def error_phase(message: str) -> PhaseStatus:
    return PhaseStatus(
        phase="error",
        id="error",
        name="Compilation Error",
        status=ERROR,
        details=f"Error: {message}. Please try a different input.",
    )


class Compiler:
    """Runs the six phases for one request at a time, against a caller-owned Session."""

    def __init__(self, resolver: DefinitionResolver | None = None, config: CompilerConfig | None = None):
        self.config = config or CompilerConfig.from_env()
        self.resolver = resolver or DefinitionResolver.from_config(self.config)

    def new_session(self) -> Session:
        return Session(memory=ContextMemory(self.config.memory_size))

    async def compile(
        self,
        request: CompileRequest,
        session: Session | None = None,
        on_phase: PhaseCallback | None = None,
    ) -> CompileResult:
        session = session if session is not None else self.new_session()
        started = time.perf_counter()
        fmt = normalize_format(request.format)

        context = {
            "resolver": self.resolver,
            "config": self.config,
            "session": session,
            "started": started,
        }
        runner = LayerRunner(context, on_phase)

        try:
            results, phases = await runner.run(request, PIPELINE)
        except Exception as e:
            # failures outside any single layer (e.g. planning)
            logger.exception("compilation failed")
            results, phases = {}, []
            failure = str(e)
        else:
            failed = [lid for lid, r in results.items() if not r.success]
            failure = results[failed[0]].message if failed else None

        duration_ms = (time.perf_counter() - started) * 1000

        if failure is not None:
            terminal = error_phase(failure.removeprefix("error: "))
            phases.append(terminal)
            if on_phase is not None:
                on_phase(terminal)
            session.analytics.record(duration_ms, success=False)
            return CompileResult(
                success=False,
                format=fmt,
                phases=phases,
                results=results,
                error=failure,
                duration_ms=duration_ms,
            )

        graph = results["semantic"].data
        output = results["output"].data

        session.memory.append(context_entry_for(graph))
        session.analytics.record(duration_ms, success=graph.overall_confidence >= LOW_CONFIDENCE)

        return CompileResult(
            success=True,
            format=fmt,
            output=output["rendered"],
            document=output["document"],
            phases=phases,
            results=results,
            duration_ms=duration_ms,
        )

    def compile_sync(
        self,
        request: CompileRequest,
        session: Session | None = None,
        on_phase: PhaseCallback | None = None,
    ) -> CompileResult:
        return asyncio.run(self.compile(request, session, on_phase))

"""
Output layer - assemble the final document and render it.
"""

import time

from nlcompiler.core.layers import Layer, LayerResult, register_layer
from nlcompiler.core.memory import ContextMemory
from nlcompiler.core.output import build_document, normalize_format, render


class OutputLayer(Layer):
    id = "output"
    name = "Output Generation"
    depends_on = ["lexical", "semantic", "optimize"]
    ext = ".out"

    def process(self, inputs: dict, context: dict) -> LayerResult:
        request = inputs["_request"]
        fmt = normalize_format(request.format)

        session = context.get("session")
        memory = session.memory if session else ContextMemory()
        config = context.get("config")

        started = context.get("started")
        elapsed_ms = int((time.perf_counter() - started) * 1000) if started else 0

        document = build_document(
            text=request.text,
            tokens=inputs["lexical"],
            graph=inputs["semantic"],
            optimized=inputs["optimize"],
            memory=memory,
            fmt=fmt,
            language=request.language,
            dictionary_api=config.dictionary_label if config else "fallback",
            compilation_time_ms=elapsed_ms,
        )
        rendered = render(document, fmt)

        return LayerResult(
            True,
            {"format": fmt, "document": document, "rendered": rendered},
            f"Generated {fmt.upper()} output | Size: {len(rendered) / 1024:.2f}KB",
        )

    def format_dsl(self, data: dict) -> str:
        return data["rendered"]


register_layer(OutputLayer())

"""
Lexical layer - words, dictionary entries, POS tags.

Dictionary lookups for all words run concurrently; tagging happens after
every entry is back, in word order.
"""

from nlcompiler.core.dictionary import fallback_entry
from nlcompiler.core.layers import Layer, LayerResult, register_layer
from nlcompiler.core.models import NO_DEFINITION, Token
from nlcompiler.core.tagger import split_words, tag_word


def build_tokens(words: list[str], entries: list) -> list[Token]:
    tokens = []
    for i, word in enumerate(words):
        entry = entries[i]
        prev_word = words[i - 1] if i > 0 else None
        next_word = words[i + 1] if i + 1 < len(words) else None
        tokens.append(Token(
            index=i,
            text=word,
            lowercase=word.lower(),
            pos=tag_word(word, prev_word, next_word, entry),
            entry=entry,
            definition=(entry.first_definition if entry else None) or NO_DEFINITION,
            synonyms=tuple(entry.first_synonyms) if entry else (),
        ))
    return tokens


class LexicalLayer(Layer):
    id = "lexical"
    name = "Lexical Analysis"
    depends_on = []
    ext = ".lex"

    async def aprocess(self, inputs: dict, context: dict) -> LayerResult:
        request = inputs["_request"]
        words = split_words(request.text)

        resolver = context.get("resolver")
        if resolver is not None:
            entries = await resolver.resolve_many(words)
        else:
            entries = [fallback_entry(w) for w in words]

        return self.process({**inputs, "_words": words, "_entries": entries}, context)

    def process(self, inputs: dict, context: dict) -> LayerResult:
        words = inputs.get("_words")
        if words is None:
            words = split_words(inputs["_request"].text)
        entries = inputs.get("_entries") or [fallback_entry(w) for w in words]

        tokens = build_tokens(words, entries)

        hits = sum(1 for t in tokens if t.has_entry)
        accuracy = hits / len(tokens) * 100 if tokens else 0.0

        return LayerResult(
            True,
            tokens,
            f"Processed {len(tokens)} tokens | {hits} dictionary hits | POS accuracy: {accuracy:.1f}%",
        )

    def format_dsl(self, data: list[Token]) -> str:
        """
        0: My [possessive-pronoun] belonging to me
        1: dog [noun]
        """
        lines = []
        for t in data:
            line = f"{t.index}: {t.text} [{t.pos}]"
            if t.has_entry:
                line += f" {t.definition}"
            lines.append(line)
        return "\n".join(lines) if lines else "# no tokens"


register_layer(LexicalLayer())

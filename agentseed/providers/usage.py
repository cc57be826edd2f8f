"""Token usage accounting across the LLM calls of one command run."""

from __future__ import annotations

from dataclasses import dataclass, field

from agentseed.providers.base import TokenUsage

# Approximate USD per 1M tokens: (input, output)
PRICING: dict[str, tuple[float, float]] = {
    "claude-sonnet-4-5-20250929": (3.0, 15.0),
    "claude-haiku-4-5-20251001": (0.8, 4.0),
    "gpt-4o": (2.5, 10.0),
    "gpt-4o-mini": (0.15, 0.6),
}


def estimate_cost(model: str, input_tokens: int, output_tokens: int) -> float | None:
    """Return estimated USD cost, or None for models without known pricing."""
    pricing = PRICING.get(model)
    if pricing is None:
        return None
    price_input, price_output = pricing
    return (input_tokens / 1_000_000) * price_input + (output_tokens / 1_000_000) * price_output


@dataclass
class UsageTracker:
    model: str
    entries: list[TokenUsage] = field(default_factory=list)

    def add(self, usage: TokenUsage | None) -> None:
        if usage is not None:
            self.entries.append(usage)

    @property
    def call_count(self) -> int:
        return len(self.entries)

    @property
    def total_input(self) -> int:
        return sum(e.input_tokens for e in self.entries)

    @property
    def total_output(self) -> int:
        return sum(e.output_tokens for e in self.entries)

    def summary(self) -> str | None:
        """One-line usage summary, or None when no call was recorded."""
        if not self.entries:
            return None
        total = self.total_input + self.total_output
        line = (
            f"LLM usage: {self.call_count} call(s), "
            f"{self.total_input:,} input + {self.total_output:,} output = {total:,} tokens"
        )
        cost = estimate_cost(self.model, self.total_input, self.total_output)
        if cost is not None:
            line += f" (~${cost:.4f})"
        return line

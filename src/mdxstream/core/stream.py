"""Token accumulation into growing document frames."""

from dataclasses import dataclass, field


@dataclass
class PrefixBatcher:
    """Accumulates tokens and releases the whole prefix once enough has grown."""

    batch_size: int = 20
    _text: str = field(default="", init=False, repr=False)
    _pending: int = field(default=0, init=False, repr=False)

    @property
    def text(self) -> str:
        """Everything accumulated so far."""
        return self._text

    def add(self, token: str) -> str | None:
        """Add token, return the current prefix if a frame is due."""
        self._text += token
        self._pending += len(token)
        if self._pending >= self.batch_size:
            self._pending = 0
            return self._text
        return None


"""Generation sources: where streamed document frames come from."""

from collections.abc import AsyncGenerator, AsyncIterable, AsyncIterator
from typing import Protocol, runtime_checkable

from ..core import PrefixBatcher


@runtime_checkable
class GenerationSource(Protocol):
    """Produces growing document prefixes, then one complete document."""

    def frames(self) -> AsyncIterator[str]:
        ...

    async def final(self) -> str:
        ...


async def close_async_iterator(iterator: object) -> None:
    """Close an async iterator if it supports closing."""
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


class TokenStreamSource:
    """
    Adapts a token stream (e.g. LLM output) into a generation source.

    A frame is emitted each time ``batch_size`` new characters have
    accumulated. The tail after the last frame is only delivered through
    :meth:`final`, which covers the whole document anyway.
    """

    def __init__(self, tokens: AsyncIterable[str], batch_size: int = 20) -> None:
        self._tokens = aiter(tokens)
        self._batcher = PrefixBatcher(batch_size=batch_size)
        self._exhausted = False

    async def frames(self) -> AsyncGenerator[str, None]:
        try:
            async for token in self._tokens:
                if frame := self._batcher.add(token):
                    yield frame
            self._exhausted = True
        finally:
            if not self._exhausted:
                await close_async_iterator(self._tokens)

    async def final(self) -> str:
        """Drain any remaining tokens and return the complete document."""
        if not self._exhausted:
            async for token in self._tokens:
                self._batcher.add(token)
            self._exhausted = True
        return self._batcher.text

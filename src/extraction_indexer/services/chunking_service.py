"""Break-aware sliding-window chunking for linearized extraction text."""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from extraction_indexer.config import BREAK_MARKERS, ChunkingSettings
from extraction_indexer.models.chunk import TextChunk
from extraction_indexer.services.token_estimator import estimate_tokens
from extraction_indexer.utils.errors import ChunkingError
from extraction_indexer.utils.logging import get_logger

logger = get_logger("chunking_service")

DEFAULT_BREAK_MARKERS: Tuple[str, ...] = (
    BREAK_MARKERS["newline"],
    BREAK_MARKERS["comma"],
    BREAK_MARKERS["space"],
)


@dataclass(frozen=True)
class BreakPointStrategy:
    """
    Choose where to cut a window so words and clauses are not split.

    Every marker is searched from the right; the right-most hit across all
    markers wins, but only if it lies beyond ``min_fraction`` of the window.
    """

    markers: Sequence[str] = field(default=DEFAULT_BREAK_MARKERS)
    min_fraction: float = 0.5

    def find(self, window: str) -> Optional[int]:
        """Return the offset to truncate *window* at, or None to keep it whole."""
        offsets = [window.rfind(marker) for marker in self.markers]
        found = [offset for offset in offsets if offset >= 0]
        if not found:
            return None
        best = max(found)
        if best > len(window) * self.min_fraction:
            return best
        return None


class ChunkingService:
    """
    Split text into overlapping, break-aware character windows.

    Windows are ``chunk_size`` characters long. Every window after the first
    starts ``overlap`` characters before the previous window's end. A window
    that does not reach the end of the text is cut at the right-most break
    marker when that marker sits in its second half; the next window still
    starts from the uncut end. Pieces are trimmed and empty pieces dropped.
    """

    def __init__(
        self,
        chunk_size: int = 1000,
        overlap: int = 100,
        break_strategy: Optional[BreakPointStrategy] = None,
    ):
        if chunk_size <= 0:
            raise ChunkingError("chunk_size must be > 0", details={"chunk_size": chunk_size})
        if overlap < 0:
            raise ChunkingError("overlap must be >= 0", details={"overlap": overlap})
        if overlap >= chunk_size:
            raise ChunkingError(
                "overlap must be less than chunk_size",
                details={"overlap": overlap, "chunk_size": chunk_size},
            )
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.break_strategy = break_strategy or BreakPointStrategy()

    @classmethod
    def from_settings(cls, settings: ChunkingSettings) -> "ChunkingService":
        """Build a chunker from the chunking settings group."""
        return cls(
            chunk_size=settings.chunk_size,
            overlap=settings.chunk_overlap,
            break_strategy=BreakPointStrategy(markers=tuple(settings.break_markers)),
        )

    def iter_windows(self, text: str) -> Iterator[Tuple[int, int]]:
        """Yield the untruncated ``(start, end)`` span of every window."""
        length = len(text)
        if length <= self.chunk_size:
            yield 0, length
            return

        start = 0
        while True:
            end = min(start + self.chunk_size, length)
            yield start, end
            if end >= length:
                return
            start = end - self.overlap

    def split(self, text: str) -> List[str]:
        """Return the ordered, trimmed, non-empty pieces of *text*."""
        if not text:
            return []

        length = len(text)
        if length <= self.chunk_size:
            stripped = text.strip()
            return [stripped] if stripped else []

        pieces: List[str] = []
        for start, end in self.iter_windows(text):
            window = text[start:end]
            if end < length:
                cut = self.break_strategy.find(window)
                if cut is not None:
                    window = window[:cut]
            piece = window.strip()
            if piece:
                pieces.append(piece)
        return pieces

    def chunk_text(self, text: str) -> List[TextChunk]:
        """Split *text* and attach positions and token estimates."""
        pieces = self.split(text)
        chunks = [
            TextChunk(position=position, text=piece, token_count=estimate_tokens(piece))
            for position, piece in enumerate(pieces)
        ]
        logger.debug(
            f"Chunked text: length={len(text)}, chunks={len(chunks)}, "
            f"chunk_size={self.chunk_size}, overlap={self.overlap}"
        )
        return chunks


def chunk_text(
    text: str,
    target_size: int,
    overlap: int,
    break_strategy: Optional[BreakPointStrategy] = None,
) -> List[str]:
    """Functional form of :meth:`ChunkingService.split`."""
    return ChunkingService(target_size, overlap, break_strategy).split(text)

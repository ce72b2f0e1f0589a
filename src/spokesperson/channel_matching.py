"""Channel reference resolution.

Schedule jobs may name their channel either by id or by display name. The
resolver maps any such reference to the canonical channel id once, at
ingestion, so queries never have to re-resolve ambiguous references. Exact
id and case-insensitive name lookups come first; rapidfuzz scoring catches
small spelling differences in hand-written data files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from rapidfuzz import fuzz, process

from .logging_config import get_logger
from .models import Channel

DEFAULT_MATCH_THRESHOLD = 90

logger = get_logger("channel_matching")


@dataclass
class ChannelMatch:
    """Represents a resolved channel reference."""

    channel_id: str
    matched_text: str
    score: float
    match_type: str  # "id", "name", "fuzzy"


class ChannelResolver:
    """Resolves channel ids or display names to canonical channel ids."""

    def __init__(
        self,
        channels: Iterable[Channel],
        *,
        match_threshold: int = DEFAULT_MATCH_THRESHOLD,
    ) -> None:
        self.match_threshold = match_threshold
        self._ids: Dict[str, str] = {}
        self._name_lookup: Dict[str, str] = {}
        for channel in channels:
            self._ids[channel.id] = channel.id
            self._name_lookup[channel.id.lower()] = channel.id
            self._name_lookup[channel.name.strip().lower()] = channel.id

    def match(self, reference: Optional[str]) -> Optional[ChannelMatch]:
        """Return the best match for ``reference`` or ``None``."""
        if not reference:
            return None
        text = str(reference).strip()
        if text in self._ids:
            return ChannelMatch(channel_id=text, matched_text=text, score=100.0, match_type="id")

        lowered = text.lower()
        if lowered in self._name_lookup:
            return ChannelMatch(
                channel_id=self._name_lookup[lowered],
                matched_text=text,
                score=100.0,
                match_type="name",
            )

        if not self._name_lookup:
            return None
        result = process.extractOne(
            lowered,
            self._name_lookup.keys(),
            scorer=fuzz.token_sort_ratio,
            score_cutoff=self.match_threshold,
        )
        if result is None:
            return None
        matched_term, score, _ = result
        channel_id = self._name_lookup[matched_term]
        logger.warning(f"Resolved channel reference {text!r} to {channel_id!r} by fuzzy match ({score:.0f})")
        return ChannelMatch(
            channel_id=channel_id,
            matched_text=text,
            score=float(score),
            match_type="fuzzy",
        )

    def resolve(self, *references: Optional[str]) -> Optional[str]:
        """Resolve the first reference that names a known channel.

        Exact matches on any reference win over fuzzy matches, so a job that
        carries both a stale name and a valid id resolves to the id.
        """
        candidates: List[ChannelMatch] = []
        for reference in references:
            found = self.match(reference)
            if found is None:
                continue
            if found.match_type != "fuzzy":
                return found.channel_id
            candidates.append(found)
        if candidates:
            return max(candidates, key=lambda item: item.score).channel_id
        return None

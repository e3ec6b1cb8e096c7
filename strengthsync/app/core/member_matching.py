"""
Reconciliation of extracted candidates against an organization's members

Strategies run in order and the first hit wins. An unmatched candidate is a
normal outcome (contractors in the export, people not yet invited), not an error.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, Tuple

from strengthsync.app.core.candidates import CandidateProfile, MatchResult, MatchStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryMember:
    """Minimal view of a member as seen by reconciliation"""
    id: str
    full_name: str
    email: str


class MemberDirectory(Protocol):
    """Member lookups scoped to one organization, both case-insensitive"""

    def find_by_email(self, email: str) -> Optional[DirectoryMember]:
        ...

    def find_by_name(self, name: str) -> Optional[DirectoryMember]:
        ...


MatchStrategyFn = Callable[[CandidateProfile, MemberDirectory], Optional[DirectoryMember]]


def flip_name(name: str) -> Optional[str]:
    """
    Turn "Last, First" into "First Last"

    Returns None unless the name splits into exactly two non-empty parts.
    """
    parts = [p.strip() for p in name.split(",")]
    if len(parts) != 2 or not all(parts):
        return None
    return f"{parts[1]} {parts[0]}"


def _by_email(candidate: CandidateProfile, directory: MemberDirectory) -> Optional[DirectoryMember]:
    if not candidate.participant_email_guess:
        return None
    return directory.find_by_email(candidate.participant_email_guess.strip())


def _by_exact_name(candidate: CandidateProfile, directory: MemberDirectory) -> Optional[DirectoryMember]:
    if not candidate.participant_name_guess:
        return None
    return directory.find_by_name(candidate.participant_name_guess.strip())


def _by_flipped_name(candidate: CandidateProfile, directory: MemberDirectory) -> Optional[DirectoryMember]:
    name = candidate.participant_name_guess
    if not name or "," not in name:
        return None
    flipped = flip_name(name)
    return directory.find_by_name(flipped) if flipped else None


MATCH_STRATEGIES: Sequence[Tuple[MatchStrategy, MatchStrategyFn]] = (
    (MatchStrategy.EMAIL, _by_email),
    (MatchStrategy.EXACT_NAME, _by_exact_name),
    (MatchStrategy.FLIPPED_NAME, _by_flipped_name),
)


def match_candidate(
    candidate: CandidateProfile,
    directory: MemberDirectory,
    strategies: Sequence[Tuple[MatchStrategy, MatchStrategyFn]] = MATCH_STRATEGIES,
) -> MatchResult:
    """
    Match one candidate to a member

    Args:
        candidate: Extracted profile
        directory: Organization-scoped member lookups
        strategies: Ordered (strategy, matcher) pairs

    Returns:
        MatchResult; matched_member_id is None when nothing matched
    """
    for strategy, matcher in strategies:
        member = matcher(candidate, directory)
        if member is not None:
            logger.debug(f"[Row {candidate.row_number}] Matched member {member.id} via {strategy.value}")
            return MatchResult(
                candidate=candidate,
                matched_member_id=member.id,
                match_strategy=strategy,
                matched_member_name=member.full_name,
            )

    return MatchResult(candidate=candidate)

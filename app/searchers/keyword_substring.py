# app/searchers/keyword_substring.py
from typing import List, Optional, Sequence

from ..models import Message, ScoredCandidate
from ..utils.normalize import tokenize

NOT_FOUND_ANSWER = "I couldn't find any messages that match that question."
DEFAULT_SPEAKER = "Member"


def score_messages(tokens: Sequence[str], messages: Sequence[Message]) -> List[ScoredCandidate]:
    # substring match: repeated question words score twice, "car" also hits "card"
    scored: List[ScoredCandidate] = []
    for msg in messages:
        text = msg.message.lower()
        score = sum(1 for t in tokens if t in text)
        if score > 0:
            scored.append(ScoredCandidate(message=msg, score=score))
    return scored


def select_best(candidates: Sequence[ScoredCandidate]) -> Optional[ScoredCandidate]:
    best: Optional[ScoredCandidate] = None
    for cand in candidates:
        # strictly greater only, so ties keep the earlier message
        if best is None or cand.score > best.score:
            best = cand
    return best


def format_answer(msg: Message) -> str:
    return f"{msg.user_name or DEFAULT_SPEAKER}: {msg.message}"


def generic_answer(question: str, messages: Sequence[Message]) -> str:
    best = select_best(score_messages(tokenize(question), messages))
    if best is None:
        return NOT_FOUND_ANSWER
    return format_answer(best.message)

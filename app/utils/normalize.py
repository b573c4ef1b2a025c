import re
from typing import List

_WORD_RE = re.compile(r"\w+", re.ASCII)


def tokenize(question: str) -> List[str]:
    return _WORD_RE.findall((question or "").lower())

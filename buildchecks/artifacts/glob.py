"""Path globs over '/'-separated relative paths.

``*`` and ``?`` never cross a ``/``; ``**`` as a whole segment matches zero
or more segments. ``[...]`` is a character class (``[!...]`` negates it), as
in ``Path.glob``; an unclosed ``[`` is literal. A glob without wildcards
matches one exact path only.
"""

import re
from functools import lru_cache
from typing import Iterable, Pattern


def _segment_regex(segment: str) -> str:
    regex = ""
    i = 0
    while i < len(segment):
        char = segment[i]
        i += 1
        if char == "*":
            regex += "[^/]*"
        elif char == "?":
            regex += "[^/]"
        elif char == "[":
            end = segment.find("]", i + 1 if segment[i : i + 1] in ("!", "]") else i)
            if end == -1:
                regex += re.escape(char)
                continue
            chars = segment[i:end]
            i = end + 1
            negate = chars.startswith("!")
            if negate:
                chars = chars[1:]
            body = re.escape(chars).replace(r"\-", "-")
            regex += f"[^/{body}]" if negate else f"(?!/)[{body}]"
        else:
            regex += re.escape(char)
    return regex


@lru_cache(maxsize=256)
def compile_glob(glob: str) -> Pattern[str]:
    segments = glob.strip("/").split("/")
    parts = []
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == "**":
            # zero or more whole segments, including their separators
            parts.append(".*" if last else "(?:[^/]+/)*")
            continue
        regex = _segment_regex(segment)
        parts.append(regex if last else regex + "/")
    return re.compile("".join(parts))


def glob_matches(glob: str, path: str) -> bool:
    return compile_glob(glob).fullmatch(path) is not None


def any_glob_match(glob: str, paths: Iterable[str]) -> bool:
    pattern = compile_glob(glob)
    return any(pattern.fullmatch(path) for path in paths)

import re
from dataclasses import dataclass
from typing import Iterable, Optional

FENCE = "```"

# ASCII-only word boundary.
_WORD_END = r"(?![A-Za-z0-9_])"

_COPY_BADGE_LINE = re.compile(r"^Copyhljs" + _WORD_END, re.IGNORECASE)
_COPY_BADGE_TAIL = re.compile(r"\s+Copyhljs" + _WORD_END + r".*$", re.IGNORECASE)

_CODE_LINE = re.compile(
  r"(;|\{|\}|#include|std::|^\s{2,}|^\s*//|^\s*#|^\s*(g\+\+|\./|npm |yarn |pnpm ))"
)
_CODE_HINT = re.compile(r"(;|\{|\}|#include|std::)")

# Ordered: the first matching rule decides the tag.
LANGUAGE_RULES: list[tuple[re.Pattern, str]] = [
  (re.compile(r"#include|std::|int\s+main\s*\("), "cpp"),
  (re.compile(r"^\s*(g\+\+|\./|bash" + _WORD_END + ")", re.MULTILINE), "bash"),
  (re.compile(r"^\s*import\s+|^\s*export\s+|=>", re.MULTILINE), "ts"),
  (re.compile(r"^\s*def\s+|^\s*class\s+|:\s*$", re.MULTILINE), "python"),
]


@dataclass(frozen=True)
class Block:
  kind: str
  lines: tuple[str, ...]


def _is_artifact_line(line: str) -> bool:
  trimmed = line.strip()
  return trimmed == "Copy" or _COPY_BADGE_LINE.match(trimmed) is not None


def strip_copy_artifacts(text: Optional[str]) -> list[str]:
  cleaned: list[str] = []
  for line in (text or "").split("\n"):
    if _is_artifact_line(line):
      continue
    # Dropping the badge tail can leave a bare label behind.
    line = _COPY_BADGE_TAIL.sub("", line)
    if _is_artifact_line(line):
      continue
    cleaned.append(line)
  return cleaned


def is_code_line(line: str) -> bool:
  if not line.strip():
    return False
  return _CODE_LINE.search(line) is not None


def is_fence_line(line: str) -> bool:
  return line.strip().startswith(FENCE)


def detect_code_language(lines: Iterable[str]) -> Optional[str]:
  text = "\n".join(lines)
  for pattern, language in LANGUAGE_RULES:
    if pattern.search(text):
      return language
  return None


def group_lines(lines: list[str]) -> list[Block]:
  """Partition lines into prose, loose code and already-fenced blocks.

  Adjacent lines of the same kind are merged. Anything between an opening
  fence and its closing fence (or the end of input) is kept as one
  ``fenced`` block and never classified.
  """
  blocks: list[Block] = []
  i = 0
  while i < len(lines):
    start = i
    if is_fence_line(lines[i]):
      i += 1
      while i < len(lines) and not is_fence_line(lines[i]):
        i += 1
      i = min(i + 1, len(lines))
      kind = "fenced"
    elif is_code_line(lines[i]):
      while i < len(lines) and is_code_line(lines[i]) and not is_fence_line(lines[i]):
        i += 1
      kind = "code"
    else:
      while i < len(lines) and not is_code_line(lines[i]) and not is_fence_line(lines[i]):
        i += 1
      kind = "prose"
    blocks.append(Block(kind, tuple(lines[start:i])))
  return blocks


def render_blocks(blocks: Iterable[Block]) -> str:
  out: list[str] = []
  for block in blocks:
    if block.kind == "code":
      out.append(FENCE + (detect_code_language(block.lines) or ""))
      out.extend(block.lines)
      out.append(FENCE)
    else:
      out.extend(block.lines)
  return "\n".join(out)


def looks_like_code(text: str) -> bool:
  if not text:
    return False
  if len(text.split("\n")) <= 2:
    return False
  return len(_CODE_HINT.findall(text)) >= 2


def wrap_code_block(text: str, language: Optional[str] = None) -> str:
  return f"{FENCE}{language or ''}\n{text.strip()}\n{FENCE}"


def normalize_reply(text: Optional[str]) -> str:
  lines = strip_copy_artifacts(text)
  result = render_blocks(group_lines(lines))
  if FENCE not in result and looks_like_code(result):
    return wrap_code_block(result, detect_code_language(lines))
  return result

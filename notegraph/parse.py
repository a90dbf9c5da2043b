"""Parse a markdown note into a document node.

Front matter, links, keywords, concepts and a difficulty estimate are all
extracted from the raw text with regular expressions; no markdown renderer
is involved.
"""

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import (
    CODE_BLOCK_WEIGHT,
    CONCEPT_MAX_LENGTH,
    CONCEPT_MIN_LENGTH,
    CONCEPT_WEIGHT,
    MAX_CONCEPTS,
    MAX_DIFFICULTY,
    MAX_KEYWORDS,
    MAX_LENGTH_SCORE,
    MIN_DIFFICULTY,
    WORDS_PER_DIFFICULTY_POINT,
)

logger = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---", re.DOTALL)
FRONT_MATTER_LINE_RE = re.compile(r"^([A-Za-z_][\w-]*):\s*(.*?)\s*$")
CODE_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
TITLE_HEADING_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
HEADING_RE = re.compile(r"^#+\s+(.+)$", re.MULTILINE)
BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
# ASCII letters or Hangul syllables
TOKEN_RE = re.compile(r"[a-z가-힣]{2,}")


@dataclass
class FrontMatter:
    """Known front matter fields; anything else lands in extra.

    Only title and category feed the graph. The remaining fields are kept
    so callers get the whole block back.
    """
    title: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    last_modified_at: Optional[str] = None
    extra: dict = field(default_factory=dict)


def _strip_quotes(value):
    value = re.sub(r"^[\"']", "", value)
    return re.sub(r"[\"']$", "", value)


def parse_front_matter(content) -> Optional[FrontMatter]:
    """Parse a leading ``---`` delimited block of ``key: value`` lines.

    Returns None when the content has no front matter block.
    """
    match = FRONT_MATTER_RE.match(content)
    if not match:
        return None

    front_matter = FrontMatter()
    known = {"title", "category", "date", "last_modified_at"}
    for line in match.group(1).splitlines():
        m = FRONT_MATTER_LINE_RE.match(line)
        if not m:
            continue
        key, value = m.group(1), _strip_quotes(m.group(2))
        if not value:
            continue
        if key in known:
            setattr(front_matter, key, value)
        else:
            front_matter.extra[key] = value
    return front_matter


def strip_front_matter(content):
    match = FRONT_MATTER_RE.match(content)
    return content[match.end():] if match else content


def strip_code_blocks(content):
    return CODE_BLOCK_RE.sub("", content)


def extract_title(content, front_matter, path):
    """Front matter title, then the first ``# `` heading, then the file stem."""
    if front_matter and front_matter.title:
        return front_matter.title
    body = strip_code_blocks(strip_front_matter(content))
    match = TITLE_HEADING_RE.search(body)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return Path(path).stem


def extract_links(content):
    """Return local markdown link targets in document order.

    External URLs and anything not ending in ``.md`` are ignored.
    """
    links = []
    for match in LINK_RE.finditer(content):
        target = match.group(2)
        if not target.startswith("http") and target.endswith(".md"):
            links.append(re.sub(r"^\./", "", target))
    return links


def extract_keywords(content, limit=MAX_KEYWORDS):
    """Most frequent lowercase tokens outside fenced code blocks.

    Ties keep the order in which the tokens were first seen.
    """
    words = TOKEN_RE.findall(strip_code_blocks(content).lower())
    return [word for word, _ in Counter(words).most_common(limit)]


def extract_concepts(content, limit=MAX_CONCEPTS):
    """Collect heading text and bolded spans as lowercase concepts."""
    concepts = {}

    for match in HEADING_RE.finditer(content):
        text = match.group(1).strip()
        if text:
            concepts.setdefault(text.lower(), None)

    for match in BOLD_RE.finditer(content):
        text = match.group(1).strip()
        if CONCEPT_MIN_LENGTH < len(text) < CONCEPT_MAX_LENGTH:
            concepts.setdefault(text.lower(), None)

    return list(concepts)[:limit]


def count_words(content):
    return len(content.split())


def round_half_up(value):
    """Round .5 away from zero for positive values, like Math.round."""
    return int(math.floor(value + 0.5))


def estimate_difficulty(content, concepts, word_count):
    """Approximate 1-5 difficulty from length, concept count and code blocks."""
    score = min(word_count / WORDS_PER_DIFFICULTY_POINT, MAX_LENGTH_SCORE)
    score += len(concepts) * CONCEPT_WEIGHT
    code_blocks = content.count("```") / 2
    score += code_blocks * CODE_BLOCK_WEIGHT
    return min(max(round_half_up(score), MIN_DIFFICULTY), MAX_DIFFICULTY)


def parse_document(file_path, root):
    """Read one markdown file and build its document node.

    Args:
        file_path: path of the markdown file
        root: corpus root; node ids are paths relative to it

    Returns:
        Node dict, or None if the file could not be read.
    """
    file_path = Path(file_path)
    try:
        content = file_path.read_text(encoding="utf-8")
        relative_path = file_path.relative_to(root).as_posix()
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Failed to parse %s: %s", file_path, e)
        return None

    front_matter = parse_front_matter(content)
    topic = relative_path.split("/")[0]
    if front_matter and front_matter.category:
        topic = front_matter.category

    concepts = extract_concepts(content)
    word_count = count_words(content)

    return {
        "id": relative_path,
        "title": extract_title(content, front_matter, file_path),
        "filePath": relative_path,
        "topic": topic,
        "links": extract_links(content),
        "backlinks": [],
        "keywords": extract_keywords(content),
        "concepts": concepts,
        "difficulty": estimate_difficulty(content, concepts, word_count),
        "wordCount": word_count,
    }

"""
Outline, slug and reading statistics helpers

Small text utilities used next to the renderer when a post is edited or
displayed: the table of contents, URL slugs for titles and the
word count / minutes-to-read shown on post cards.
"""

import re
import math
from typing import List, Optional

from ..config import AppSettings, appsettings
from ..models.content import OutlineEntry, ReadingStats


OUTLINE_RE = re.compile(r'^(#{1,6})[ \t]+(.+)$', re.MULTILINE)
TAG_RE = re.compile(r'<[^>]+>')


def slug_make(title: str) -> str:
    """
    Build a URL slug from a post title

    Lowercases, drops anything outside [a-z0-9 -], turns whitespace runs
    into a single hyphen and collapses repeated hyphens.

    Example:
        >>> slug_make("Hello, World!  Again")
        'hello-world-again'
    """
    slug = title.lower()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug.strip())
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def anchor_make(title: str) -> str:
    """
    Build a heading anchor (fragment identifier) from heading text

    Example:
        >>> anchor_make("1. Getting Started!")
        '1-getting-started'
    """
    anchor = re.sub(r'[^a-z0-9]+', '-', title.lower())
    return anchor.strip('-')


def outline_extract(source: str) -> List[OutlineEntry]:
    """
    Extract the table of contents from post source

    Every line starting with 1-6 # followed by whitespace is a heading,
    listed in source order. Unlike the renderer, which only renders
    levels 1-3, the outline keeps deeper levels.

    Args:
        source: Post source

    Returns:
        OutlineEntry per heading
    """
    entries = []
    for match in OUTLINE_RE.finditer(source.replace('\r\n', '\n')):
        title = match.group(2).strip()
        entries.append(OutlineEntry(anchor=anchor_make(title), title=title, level=len(match.group(1))))
    return entries


def readingStats_compute(source: str, settings: Optional[AppSettings] = None) -> ReadingStats:
    """
    Count words and estimate reading time

    HTML tags are stripped before counting. Reading time is rounded to
    whole minutes and never less than one.

    Args:
        source: Post source (markdown, HTML, or a mix)
        settings: Optional AppSettings for the words-per-minute rate

    Returns:
        ReadingStats(words, minutes)
    """
    settings = settings or appsettings
    plain = TAG_RE.sub('', source)
    words = len(plain.split())
    # Halves round up
    minutes = max(1, math.floor(words / settings.words_per_minute + 0.5))
    return ReadingStats(words=words, minutes=minutes)

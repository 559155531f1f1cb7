import re
from typing import Awaitable, Callable

DEFAULT_SLUG = "workspace"
MAX_SLUG_SUFFIX = 1000
# workspaces.slug column width
MAX_SLUG_LENGTH = 100

_INVALID_CHARS = re.compile(r"[^a-z0-9\-]")
_REPEATED_HYPHENS = re.compile(r"-+")


class SlugGenerationError(Exception):
    """No free slug within the probe bound, or the existence check failed"""


def generate_slug(name: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    "My Workspace" -> "my-workspace"; names with no usable characters fall
    back to "workspace".
    """
    slug = name.lower().replace(" ", "-")
    slug = _INVALID_CHARS.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    slug = slug.strip("-")
    return slug or DEFAULT_SLUG


async def generate_unique_slug(
    name: str,
    exists: Callable[[str], Awaitable[bool]],
    max_suffix: int = MAX_SLUG_SUFFIX,
) -> str:
    """
    Return the base slug, or the first free "<base>-N" for N in 1..max_suffix.

    The base is cut so that every candidate, suffix included, fits in
    MAX_SLUG_LENGTH.

    The probe is check-then-insert and can race with a concurrent creation of
    the same name; the unique constraint on workspaces.slug is the backstop.

    Raises:
        SlugGenerationError: all candidates taken, or exists() failed
    """
    base = generate_slug(name)
    room = MAX_SLUG_LENGTH - len(f"-{max_suffix}")
    if len(base) > room:
        base = base[:room].rstrip("-") or DEFAULT_SLUG

    try:
        if not await exists(base):
            return base

        for i in range(1, max_suffix + 1):
            candidate = f"{base}-{i}"
            if not await exists(candidate):
                return candidate
    except Exception as exc:
        raise SlugGenerationError(f"failed to check slug existence for {name!r}") from exc

    raise SlugGenerationError(f"unable to generate unique slug for name: {name}")

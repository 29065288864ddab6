"""
Tag constants and the active-tag registry.

Tags are named output categories. Any non-blank string is a legal tag;
the constants below are only a starter set. Projects usually keep their
own module of tag constants next to these:

    from taglog import tags
    NETWORK = "NET"
    log("connected", tags.INFO, NETWORK)

The FORCE tag is reserved: it is always active and can never be
disabled, so a message carrying it is never suppressed.
"""

from typing import Iterable, Iterator, List, Optional


# Special tag that always displays a log
FORCE = 'F'

# Example tags
INFO = 'INFO'
WARNING = 'WARN'
IMPORTANT = 'IMP'
ANALYTIC = 'ANALYTIC'
PLAYER = 'PLAYER'
UI = 'UI'
TRACE = 'TRACE'

KNOWN_TAGS = (FORCE, INFO, WARNING, IMPORTANT, ANALYTIC, PLAYER, UI, TRACE)

TAG_DESCRIPTIONS = {
    FORCE:     'Always shown, cannot be disabled',
    INFO:      'General information',
    WARNING:   'Unexpected but recoverable conditions',
    IMPORTANT: 'Messages worth a second look',
    ANALYTIC:  'Analytics and measurement events',
    PLAYER:    'User/player actions',
    UI:        'User interface events',
    TRACE:     'Function call tracing (@trace decorator)',
}


def is_blank(tag: Optional[str]) -> bool:
    """True for None, empty and whitespace-only tags."""
    return tag is None or not str(tag).strip()


class TagRegistry:
    """Insertion-ordered set of active tags.

    Blank tags are ignored by every operation. The FORCE tag is put back
    by reset() and refused by deactivate(), so once a registry has been
    reset it always contains FORCE.

    Usage::

        reg = TagRegistry()
        reg.reset(['INFO'])          # -> ['F', 'INFO']
        reg.activate('UI')
        reg.has_any(['UI', 'NET'])   # True
    """

    def __init__(self, tags: Iterable[str] = ()):
        # dict keeps insertion order and gives O(1) membership
        self._active = {}
        for tag in tags:
            self.activate(tag)

    def activate(self, tag: str) -> None:
        """Add `tag` to the active set; no-op if blank or already active."""
        if is_blank(tag) or tag in self._active:
            return
        self._active[tag] = None

    def deactivate(self, tag: str) -> None:
        """Remove `tag` from the active set; blank tags and FORCE are ignored."""
        if is_blank(tag) or tag == FORCE:
            return
        self._active.pop(tag, None)

    def is_active(self, tag: str) -> bool:
        if is_blank(tag):
            return False
        return tag in self._active

    def has_any(self, tags: Iterable[str]) -> bool:
        """True if at least one of `tags` is active."""
        return any(t in self._active for t in tags if not is_blank(t))

    def snapshot(self) -> List[str]:
        """Copy of the active tags in insertion order."""
        return list(self._active)

    def reset(self, settings) -> None:
        """Replace the active set with a settings snapshot's default tags.

        Accepts a Settings object (anything with `default_active_tags`) or
        a plain iterable of tags. FORCE is inserted at the front when the
        defaults do not already contain it.
        """
        tags = getattr(settings, 'default_active_tags', settings)
        active = {}
        for tag in tags or ():
            if not is_blank(tag):
                active.setdefault(tag, None)
        if FORCE not in active:
            active = {FORCE: None, **active}
        self._active = active

    def __contains__(self, tag) -> bool:
        return self.is_active(tag)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._active)

    def __repr__(self) -> str:
        return f"TagRegistry({self.snapshot()!r})"


def format_tag_list(registry: Optional[TagRegistry] = None) -> str:
    """Format the known tags for display.

    When a registry is given, active tags are marked with '*' and any
    active tag outside the known set is listed after them.

    Returns:
        Formatted string listing tags with descriptions.
    """
    lines = ["Known tags:"]
    extra = [t for t in (registry or ()) if t not in TAG_DESCRIPTIONS]
    names = list(KNOWN_TAGS) + extra
    max_name = max(len(name) for name in names)
    for name in names:
        mark = '*' if registry is not None and registry.is_active(name) else ' '
        desc = TAG_DESCRIPTIONS.get(name, '(custom)')
        lines.append(f" {mark}{name:<{max_name}}  {desc}")
    return "\n".join(lines)

"""POSIX-flavoured flag parsing shared by the built-in commands."""

from __future__ import annotations

from dataclasses import dataclass, field

# Single-letter flags that take the following argument as their value.
VALUE_FLAGS = frozenset({"n", "c"})


@dataclass
class ParsedArgs:
    flags: dict[str, bool | str] = field(default_factory=dict)
    positional: list[str] = field(default_factory=list)
    # Where each consumed flag value sat among the operands.
    value_slots: dict[str, int] = field(default_factory=dict, repr=False)

    def has(self, *names: str) -> bool:
        return any(self.flags.get(name) for name in names)

    def get(self, name: str, default: bool | str | None = None) -> bool | str | None:
        return self.flags.get(name, default)

    def as_switch(self, name: str) -> bool:
        """Treat ``name`` as a plain switch, returning any value it consumed to the operands."""
        value = self.flags.get(name)
        if isinstance(value, str) and name in self.value_slots:
            self.positional.insert(self.value_slots.pop(name), value)
            self.flags[name] = True
        return bool(value)


def parse_args(args: list[str]) -> ParsedArgs:
    """Split ``args`` into flags and positional operands.

    ``--name`` sets a boolean, ``--name=value`` a string. ``-abc`` sets each
    letter. ``-n 5`` and ``-c 5`` take the next argument as a value when the
    flag stands alone and the next argument does not begin with ``-``.
    """
    parsed = ParsedArgs()
    idx = 0
    while idx < len(args):
        arg = args[idx]
        if arg.startswith("--"):
            key, sep, value = arg[2:].partition("=")
            parsed.flags[key] = value if sep else True
        elif arg.startswith("-") and len(arg) > 1:
            letters = arg[1:]
            if (
                len(letters) == 1
                and letters in VALUE_FLAGS
                and idx + 1 < len(args)
                and not args[idx + 1].startswith("-")
            ):
                idx += 1
                parsed.flags[letters] = args[idx]
                parsed.value_slots[letters] = len(parsed.positional)
            else:
                for letter in letters:
                    parsed.flags[letter] = True
        else:
            parsed.positional.append(arg)
        idx += 1
    return parsed


__all__ = ["ParsedArgs", "parse_args", "VALUE_FLAGS"]

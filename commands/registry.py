"""
Command registry mapping command names to runner actions.
Centralizes all available targets for the CLI.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field

from runner.errors import DuplicateNameError, RegistryFrozenError, UnknownCommandError

Action = Callable[[], int]


@dataclass(frozen=True)
class CommandSpec:
    """Specification for a single command."""
    name: str
    method_name: str  # Method name on runner instance
    description: str
    aliases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CommandEntry:
    """A registered command bound to its action."""
    name: str
    description: str
    action: Action = field(compare=False)
    aliases: Tuple[str, ...] = ()


# ============================================================================
# COMMAND SPECIFICATIONS - Single source of truth
# ============================================================================

COMMAND_SPECS = [
    CommandSpec(
        name='help',
        method_name='help',
        description='Display this help message.'
    ),
    CommandSpec(
        name='check',
        method_name='check',
        description='Runs a request including headers to our server',
        aliases=('curl',)
    ),
]


# ============================================================================
# REGISTRY
# ============================================================================

class CommandRegistry:
    """
    Ordered table of commands.

    Names and aliases share one namespace. Lookups are exact and
    case-sensitive. Once frozen the table is read-only.
    """

    def __init__(self, entries: Iterable[CommandEntry] = ()):
        self._entries: List[CommandEntry] = []
        self._index: Dict[str, CommandEntry] = {}
        self._frozen = False

        for entry in entries:
            self.register(entry.name, entry.description, entry.action, entry.aliases)

    def register(self, name: str, description: str, action: Action,
                 aliases: Iterable[str] = ()) -> CommandEntry:
        """
        Add a command.

        Raises:
            DuplicateNameError: name or one of the aliases is taken
            RegistryFrozenError: registry was frozen
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{name}': registry is frozen")

        aliases = tuple(aliases)
        for key in (name,) + aliases:
            if key in self._index:
                raise DuplicateNameError(key)
        if len(set(aliases)) != len(aliases) or name in aliases:
            raise DuplicateNameError(name)

        entry = CommandEntry(name=name, description=description, action=action, aliases=aliases)
        self._entries.append(entry)
        for key in (name,) + aliases:
            self._index[key] = entry

        return entry

    def freeze(self) -> 'CommandRegistry':
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def list(self) -> Iterator[Tuple[str, str]]:
        """Yield (name, description) pairs in registration order."""
        for entry in self._entries:
            yield entry.name, entry.description

    def find(self, name: str) -> Optional[CommandEntry]:
        return self._index.get(name)

    def resolve(self, name: str) -> Action:
        """
        Get the action bound to a name or alias.

        Raises:
            UnknownCommandError: nothing registered under that name
        """
        entry = self._index.get(name)
        if entry is None:
            raise UnknownCommandError(name)
        return entry.action

    def names(self) -> List[str]:
        """All valid command names including aliases."""
        names = []
        for entry in self._entries:
            names.append(entry.name)
            names.extend(entry.aliases)
        return names

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._entries)


# ============================================================================
# REGISTRY BUILDERS
# ============================================================================

def build_command_registry(runner, specs: Iterable[CommandSpec] = None) -> CommandRegistry:
    """
    Build command registry from runner instance.

    Args:
        runner: TaskRunner instance with all mixins
        specs: Command specifications (defaults to COMMAND_SPECS)

    Returns:
        Frozen registry mapping command names to bound methods
    """
    registry = CommandRegistry()

    for spec in COMMAND_SPECS if specs is None else specs:
        method = getattr(runner, spec.method_name)
        registry.register(spec.name, spec.description, method, spec.aliases)

    return registry.freeze()


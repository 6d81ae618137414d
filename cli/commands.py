"""Slash command definitions and input parsing."""

COMMANDS = {
    'search': {
        'aliases': ['s'],
        'description': 'Search for a word',
        'usage': '/search <word> or /s <word>',
        'requires_args': True
    },
    'notebook': {
        'aliases': ['n'],
        'description': 'View saved words',
        'usage': '/notebook or /n',
        'requires_args': False
    },
    'learn': {
        'aliases': ['l'],
        'description': 'Start a learning session',
        'usage': '/learn or /l',
        'requires_args': False
    },
    'cet4': {
        'aliases': [],
        'description': 'Learn the CET-4 word list',
        'usage': '/cet4',
        'requires_args': False
    },
    'cet6': {
        'aliases': [],
        'description': 'Learn the CET-6 word list',
        'usage': '/cet6',
        'requires_args': False
    },
    'progress': {
        'aliases': ['p'],
        'description': 'Show learning progress',
        'usage': '/progress or /p',
        'requires_args': False
    },
    'history': {
        'aliases': [],
        'description': 'Show recent search history',
        'usage': '/history',
        'requires_args': False
    },
    'clear': {
        'aliases': ['c'],
        'description': 'Clear the screen',
        'usage': '/clear or /c',
        'requires_args': False
    },
    'help': {
        'aliases': ['h'],
        'description': 'Show available commands',
        'usage': '/help or /h',
        'requires_args': False
    },
    'quit': {
        'aliases': ['q', 'exit'],
        'description': 'Exit the application',
        'usage': '/quit, /exit, or /q',
        'requires_args': False
    }
}

_ALIASES = {}
for _name, _config in COMMANDS.items():
    _ALIASES[_name] = _name
    for _alias in _config['aliases']:
        _ALIASES[_alias] = _name


def resolve_command(name: str) -> str | None:
    """Canonical command name for a command or alias, or None."""
    return _ALIASES.get(name.lower())


def parse_input(text: str) -> dict:
    """Classify a line of REPL input.

    Returns {'type': 'empty'}, {'type': 'command', 'command', 'args', 'raw'},
    {'type': 'unknown_command', 'input'} or {'type': 'search', 'word'}.
    """
    trimmed = text.strip()
    if not trimmed:
        return {'type': 'empty'}

    if trimmed.startswith('/'):
        parts = trimmed[1:].split()
        name = parts[0].lower() if parts else ''
        command = resolve_command(name)
        if command:
            return {'type': 'command', 'command': command, 'args': parts[1:], 'raw': trimmed}
        return {'type': 'unknown_command', 'input': name}

    return {'type': 'search', 'word': trimmed}

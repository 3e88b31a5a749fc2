"""

Command line utility to resolve references in JSON Schema documents.

"""


import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List

from schemaresolver import _version
from schemaresolver.errors import SchemaResolverError
from schemaresolver.resolutioncontext import ResolutionContext

ARG_TYPES = {'str': str, 'int': int, 'float': float}


def load_commands() -> List[Dict[str, Any]]:
    """Load the commands from the commands.json file."""
    commands_path = os.path.join(os.path.dirname(__file__), 'commands.json')
    with open(commands_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def create_subparsers(subparsers, commands):
    """Create subparsers for the commands."""
    for command in commands:
        cmd_parser = subparsers.add_parser(command['command'], help=command['description'])
        for arg in command['args']:
            kwargs = {
                'help': arg['help'],
            }
            if 'choices' in arg:
                kwargs['choices'] = arg['choices']
            if 'default' in arg:
                kwargs['default'] = arg['default']
            if arg['type'] == 'bool':
                kwargs['action'] = 'store_true'
            else:
                kwargs['type'] = ARG_TYPES[arg['type']]
            carg = cmd_parser.add_argument(arg['name'], **kwargs)
            if arg['name'].startswith('-'):
                carg.required = arg.get('required', True)


def dynamic_import(module, func):
    """Dynamically import a module and function."""
    mod = __import__(module, fromlist=[func])
    return getattr(mod, func)


def command_args(command: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Map the parsed arguments onto the keyword arguments of the command function."""
    func_args = {}
    for name, val in command['function']['args'].items():
        if val.startswith('args.'):
            if hasattr(args, val[5:]):
                func_args[name] = getattr(args, val[5:])
        else:
            func_args[name] = val
    return func_args


def main(argv=None):
    """Main function for the command line utility."""
    commands = load_commands()
    parser = argparse.ArgumentParser(description='Resolve references in JSON Schema documents.')
    parser.add_argument('--version', action='store_true', help='Print the version of schemaresolver.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log fetches and cache hits.')

    subparsers = parser.add_subparsers(dest='command')
    create_subparsers(subparsers, commands)

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    if args.version:
        print(f'schemaresolver {_version.version}')
        return 0

    if args.command is None:
        parser.print_help()
        return 0

    command = next((cmd for cmd in commands if cmd['command'] == args.command), None)
    if not command:
        print(f"Error: Command {args.command} not found.")
        return 1

    module_name, func_name = command['function']['name'].rsplit('.', 1)
    func = dynamic_import(module_name, func_name)
    try:
        result = func(**command_args(command, args))
    except (SchemaResolverError, OSError) as e:
        print("Error: ", str(e), file=sys.stderr)
        return 1

    if isinstance(result, ResolutionContext):
        print(json.dumps(result.active_document, indent=2))
        print(f"dialect: {result.version.location}", file=sys.stderr)
    elif isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2))
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
nameguess - Collect name guesses from friends and family and see who guessed what.

This module holds the pieces shared by the web server and the command line:
logging setup, configuration loading, and the repository factory.  Run it
directly for a terminal view of the stored guesses.
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, Optional

from colorama import init, Fore, Style
from dotenv import load_dotenv

from guessing.errors import ConfigError, StorageError
from guessing.repositories import DBGuessRepository, JsonGuessRepository
from guessing.services import GuessService, popular_to_dict, stats_to_lines

load_dotenv()

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root nameguess logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logger = logging.getLogger('nameguess')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


logger = logging.getLogger('nameguess')

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

BACKENDS = ('file', 'database')

DEFAULT_CONFIG: Dict = {
    'backend': 'file',
    'data_file': 'guesses.json',
    'database_url': 'sqlite:///guesses.db',
    'log_level': 'WARNING',
    'host': '127.0.0.1',
    'port': 3000,
}

# environment variable -> config key
ENV_OVERRIDES = {
    'NAMEGUESS_BACKEND': 'backend',
    'NAMEGUESS_DATA_FILE': 'data_file',
    'DATABASE_URL': 'database_url',
    'NAMEGUESS_LOG_LEVEL': 'log_level',
    'NAMEGUESS_HOST': 'host',
    'NAMEGUESS_PORT': 'port',
}


def load_config(config_path: Optional[str] = 'config.json') -> Dict:
    """Load configuration from a JSON file with environment variable support.

    The file is optional; built-in defaults apply when it is missing.
    Environment variables take precedence over config file values:
    - NAMEGUESS_BACKEND overrides backend ('file' or 'database')
    - NAMEGUESS_DATA_FILE overrides data_file
    - DATABASE_URL overrides database_url
    - NAMEGUESS_LOG_LEVEL overrides log_level
    - NAMEGUESS_HOST / NAMEGUESS_PORT override host / port

    Raises:
        ConfigError: If the file exists but is not a JSON object, or a value
            is invalid.
    """
    config = dict(DEFAULT_CONFIG)
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")
        config.update(loaded)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value

    config['backend'] = str(config['backend']).lower()
    if config['backend'] not in BACKENDS:
        raise ConfigError(
            f"Unknown backend {config['backend']!r}; expected one of {', '.join(BACKENDS)}")
    try:
        config['port'] = int(config['port'])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid port {config['port']!r}") from e
    return config


def create_repository(config: Dict):
    """Build the guess repository selected by *config*.

    Raises:
        StorageError: If the database backend cannot be reached.
    """
    if config['backend'] == 'database':
        logger.info("Using database backend")
        return DBGuessRepository.from_url(config['database_url'])
    logger.info("Using file backend at %s", config['data_file'])
    return JsonGuessRepository(config['data_file'])


def create_service(config: Dict) -> GuessService:
    return GuessService(create_repository(config))


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

def print_stats(service: GuessService) -> None:
    lines = stats_to_lines(service.stats())
    print(f"{Fore.CYAN}{Style.BRIGHT}{next(lines)}")
    for line in lines:
        print(f"{Fore.WHITE}  {line}")


def print_popular(service: GuessService) -> None:
    popular = popular_to_dict(service.popular())
    if popular['name'] is None:
        print(f"{Fore.YELLOW}No name has been guessed more than once yet.")
    else:
        print(f"{Fore.GREEN}Most popular: {popular['name']} ({popular['count']} guesses)")


def main(argv=None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='nameguess - collect and summarise name guesses',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 nameguess.py                         # Show per-guesser stats
  python3 nameguess.py --count                 # Print the number of stored guesses
  python3 nameguess.py --popular               # Show the most repeated name
  python3 nameguess.py --add Alice Mia Leo     # Store guesses for Alice
        """
    )
    parser.add_argument(
        '--config', '-c',
        default='config.json',
        help='Path to config file (default: config.json)'
    )
    parser.add_argument(
        '--stats', '-s',
        action='store_true',
        help='Show per-guesser statistics (default action)'
    )
    parser.add_argument(
        '--count', '-n',
        action='store_true',
        help='Print the total number of stored guesses and exit'
    )
    parser.add_argument(
        '--popular', '-p',
        action='store_true',
        help='Show the most popular name and exit'
    )
    parser.add_argument(
        '--add',
        nargs='+',
        metavar='WORD',
        help='Store one or more guesses: GUESSER NAME [NAME ...]'
    )
    args = parser.parse_args(argv)
    if args.add and len(args.add) < 2:
        parser.error('--add needs a guesser followed by at least one name')

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"{Fore.RED}Error: {e}")
        return 2
    setup_logging(config['log_level'])

    try:
        service = create_service(config)
        if args.add:
            added = service.submit({'guesser': args.add[0], 'name': args.add[1:]})
            print(f"{Fore.GREEN}Stored {added} guess(es) for {args.add[0]}")
        elif args.count:
            print(service.count())
        elif args.popular:
            print_popular(service)
        else:
            print_stats(service)
    except StorageError as e:
        logger.error("Storage failure: %s", e)
        print(f"{Fore.RED}Error: could not access the guess store ({e})")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Config Generator for the MCPEDL client

Generates config.py from environment variables, so deployments (CI, Docker,
the REST server) can configure the client without editing files.

Usage:
    # Reads MCPEDL_* / LOG_* environment variables (VAR_ prefix also accepted)
    python3 utils/config_generator.py

    # With custom output path
    python3 utils/config_generator.py --output /path/to/config.py

    # Dry run (print config without writing)
    python3 utils/config_generator.py --dry-run
"""

import os
import sys
import argparse
from typing import Any, Callable, Dict, List, Tuple

# Allow running as a script from anywhere
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from utils.request_handler import DEFAULT_BASE_URL, DEFAULT_USER_AGENT


# =============================================================================
# Environment Variable Helpers
# =============================================================================

# Placeholder values that represent "empty" (for CI variables that cannot be blank)
EMPTY_PLACEHOLDERS = ('__EMPTY__', '__NULL__', 'null', 'none', 'NULL', 'NONE')


def get_env(name: str, default: str = '') -> str:
    """Get environment variable with default value.

    Supports VAR_ prefix for CI variable compatibility.
    Use __EMPTY__ or __NULL__ to represent an empty string.
    """
    val = os.environ.get(f'VAR_{name}', None)
    if val is None:
        val = os.environ.get(name, default)

    if val in EMPTY_PLACEHOLDERS:
        return ''
    return val or default


def get_env_int(name: str, default: int) -> int:
    """Get environment variable as integer, falling back to *default* when
    unset or invalid."""
    val = get_env(name, str(default))
    if val == '':
        return default
    try:
        return int(val)
    except (ValueError, TypeError):
        return default


def get_env_float(name: str, default: float) -> float:
    """Get environment variable as float, falling back to *default* when
    unset or invalid."""
    val = get_env(name, str(default))
    if val == '':
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def format_python_value(value: Any) -> str:
    """Format a Python value for config.py output."""
    if isinstance(value, str):
        return repr(value)
    elif isinstance(value, bool):
        return 'True' if value else 'False'
    elif value is None:
        return 'None'
    else:
        return str(value)


# =============================================================================
# Configuration Mapping
# =============================================================================

def get_config_map() -> List[Tuple[str, str, Callable, Any, str]]:
    """Get the configuration mapping.

    Format: (config_name, env_name, type_func, default_value, section)
    """
    return [
        # Client Configuration
        ('MCPEDL_BASE_URL', 'MCPEDL_BASE_URL', get_env, DEFAULT_BASE_URL, 'CLIENT CONFIGURATION'),
        ('MCPEDL_TIMEOUT', 'MCPEDL_TIMEOUT', get_env_float, 10.0, 'CLIENT CONFIGURATION'),
        ('MCPEDL_USER_AGENT', 'MCPEDL_USER_AGENT', get_env, DEFAULT_USER_AGENT, 'CLIENT CONFIGURATION'),
        # Retry Configuration
        ('MCPEDL_MAX_RETRIES', 'MCPEDL_MAX_RETRIES', get_env_int, 3, 'RETRY CONFIGURATION'),
        ('MCPEDL_RETRY_DELAY', 'MCPEDL_RETRY_DELAY', get_env_float, 1.0, 'RETRY CONFIGURATION'),
        # Rate Limit Configuration
        ('MCPEDL_RATE_LIMIT_MIN_TIME', 'MCPEDL_RATE_LIMIT_MIN_TIME', get_env_float, 1.0, 'RATE LIMIT CONFIGURATION'),
        ('MCPEDL_RATE_LIMIT_MAX_CONCURRENT', 'MCPEDL_RATE_LIMIT_MAX_CONCURRENT', get_env_int, 2, 'RATE LIMIT CONFIGURATION'),
        # Logging Configuration
        ('LOG_LEVEL', 'LOG_LEVEL', get_env, 'INFO', 'LOGGING CONFIGURATION'),
        ('LOG_FILE', 'LOG_FILE', get_env, 'logs/mcpedl.log', 'LOGGING CONFIGURATION'),
    ]


# =============================================================================
# Config Generation
# =============================================================================

def generate_config_content() -> str:
    """Generate config.py content from environment variables."""
    sections: Dict[str, List[Tuple[str, Any]]] = {}
    for config_name, env_name, type_func, default, section in get_config_map():
        sections.setdefault(section, []).append((config_name, type_func(env_name, default)))

    config_lines = [
        '# MCPEDL Client - Configuration File',
        '# Auto-generated from environment variables',
        '',
    ]

    for section_name, configs in sections.items():
        config_lines.append('# ' + '=' * 75)
        config_lines.append(f'# {section_name}')
        config_lines.append('# ' + '=' * 75)
        config_lines.append('')

        for config_name, value in configs:
            config_lines.append(f'{config_name} = {format_python_value(value)}')

        config_lines.append('')

    return '\n'.join(config_lines)


def write_config(output_path: str = 'config.py', dry_run: bool = False,
                 show_content: bool = True) -> bool:
    """Write config.py file.

    Returns:
        True if successful, False otherwise
    """
    try:
        config_content = generate_config_content()

        if not dry_run:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(config_content)
            print(f"✓ {output_path} generated successfully")
        else:
            print("✓ Dry run - config.py would be generated with the following content:")

        if show_content:
            print()
            print(config_content)

        return True

    except OSError as e:
        print(f"✗ Failed to generate config.py: {e}")
        return False


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Generate config.py from environment variables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Generate config.py from environment variables
    python3 utils/config_generator.py

    # Dry run - show what would be generated
    python3 utils/config_generator.py --dry-run

    # Generate to custom path
    python3 utils/config_generator.py --output /path/to/config.py
        """
    )

    parser.add_argument('--output', '-o', type=str, default='config.py',
                        help='Output path for config.py (default: config.py)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Print config without writing to file')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Do not print the generated content')

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    success = write_config(
        output_path=args.output,
        dry_run=args.dry_run,
        show_content=not args.quiet,
    )

    return 0 if success else 1


if __name__ == '__main__':
    exit(main())

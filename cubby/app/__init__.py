"""
App Subpackage - The cubby-template command-line tool

    - config.py: YAML settings (packaged defaults + user overrides)
    - cli.py: argparse entry point with parse / tree / search / generate
"""

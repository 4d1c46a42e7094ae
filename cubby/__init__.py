"""
Cubby Remote - Core Package

Articulation bank tooling for REAPER + Reaticulate: parses .reabank files,
sorts thousands of terse bank names into a library/instrument folder tree,
and writes .RPP project templates with banks already assigned.

Subpackages:
    - cubby.data: Bank/articulation schemas, .reabank parser, file loading
    - cubby.rules: Library prefix tables and the hierarchy classifier
    - cubby.index: Search and tri-state folder selection
    - cubby.project: REAPER project (.RPP) generation
    - cubby.protocol: Typed transport envelopes for the MIDI bridge
    - cubby.app: Command-line interface and configuration

Example usage:
    from cubby.data.reabank_parser import parse
    from cubby.rules.classifier import build_tree
    from cubby.project.rpp_generator import generate
    from cubby.project.requests import tracks_from_banks
    from cubby.project.schema import ProjectConfig

    banks, errors = parse(open("Reaticulate.reabank").read())
    tree = build_tree(banks)
    rpp = generate(ProjectConfig(tracks=tracks_from_banks(banks[:4])))
"""

__version__ = "0.1.0"
__author__ = "Cubby Remote contributors"

"""
Project Subpackage - REAPER template generation

    - schema.py: ProjectConfig / FolderConfig / TrackConfig request models
    - requests.py: Turn selected banks into a ProjectConfig
    - rpp_generator.py: Serialize a ProjectConfig to .RPP text

Usage:
    from cubby.project import build_project, generate_rpp

    rpp_text = generate_rpp(build_project(index.selected(), group=True))
"""

from cubby.project.schema import ArticulationRef, BankInfo, FolderConfig, ProjectConfig, TrackConfig
from cubby.project.requests import build_project, folders_from_banks, tracks_from_banks
from cubby.project.rpp_generator import bank_hash, generate, generate_rpp, hex_to_reaper_color

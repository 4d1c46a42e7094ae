"""
Rules Subpackage - Name-based classification of banks

Usage:
    from cubby.rules import classify_name, build_tree

    classify_name("SFBB Horns Long")   # ['Spitfire British Brass', 'Horns Long']
    tree = build_tree(banks)           # FolderNode root

    - library_patterns.py: Ordered prefix / instrument / abbreviation tables
    - classifier.py: classify(), build_tree() and the FolderNode tree
"""

from cubby.rules.classifier import FolderNode, build_tree, classify, classify_name, display_name

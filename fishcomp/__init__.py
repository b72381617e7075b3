"""
fishcomp: fish shell completion scripts from declarative command trees.
"""

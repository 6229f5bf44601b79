"""
Analysis graph.

Runs every registered agent over one paper in registry order:
    paper -> theoretical -> experimental -> peer review -> epistemic -> done
"""

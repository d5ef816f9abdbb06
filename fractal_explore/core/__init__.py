"""Service layer for fractal-explore.

Services never import from fractal_explore.ui, fractal_explore.cli, or
typer. The CLI handles presentation.
"""

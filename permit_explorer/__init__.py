"""
Core package for the Chicago building permits explorer.

Submodules provide configuration, data loading, Vega-Lite specification
assembly, and Streamlit rendering helpers that are orchestrated by the
top-level `app.py`.
"""

"""Streamlit front end. Run with ``streamlit run offgrid_sizer/ui/app.py``."""

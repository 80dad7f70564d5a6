"""
Off-Grid Solar Sizer
====================

Sizing calculator for stand-alone solar systems:
- Load analysis (day/night and AC/DC split of appliance energy)
- Inverter, battery bank, PV array and charge controller sizing
- Purchase combinations for common panel and battery units
- Sustainability check for an existing or planned system

Architecture:
- sizing/: calculation engine, policy, persisted snapshot, CLI
- export/: tables, charts, PDF and text reports
- ui/: Streamlit calculator interface
"""

__version__ = "1.0.0"

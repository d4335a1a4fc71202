"""
BloomWatch: climate, vegetation and bloom insights for regions on a map.
The package groups the FastAPI service, the Streamlit dashboard and the external API clients they share.
Most functionality lives in the subpackages; this file intentionally stays lightweight.
"""

__version__ = "0.1.0"

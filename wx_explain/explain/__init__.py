"""Field explanations and summaries."""

from wx_explain.explain.fields import FieldExplainer, explain_cloud_layer, explain_clouds
from wx_explain.explain.summary import build_summary

__all__ = [
    'FieldExplainer',
    'explain_cloud_layer',
    'explain_clouds',
    'build_summary',
]

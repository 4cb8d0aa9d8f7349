from .web_graph import WebGraph

__all__ = ["WebGraph"]

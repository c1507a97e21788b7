from .builder import SiteGraph, build_site, build_site_graph, new_run_context, run_build

__all__ = ["SiteGraph", "build_site", "build_site_graph", "new_run_context", "run_build"]

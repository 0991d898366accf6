from climb.render.tree import TREE_LIMIT, render_list, render_report, render_tree

__all__ = ["TREE_LIMIT", "render_list", "render_report", "render_tree"]

"""Visual renderings of dagweave graphs."""

from dagweave.visualization.tree import build_tree, node_label

__all__ = ["build_tree", "node_label"]

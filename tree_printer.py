import sys
from typing import List, Optional, TextIO, Tuple

from obst import OBSTNode


def _layout(node: OBSTNode) -> Tuple[List[str], int, int, int]:
    """
    Lay out the subtree rooted at node.

    Returns (lines, width, height, middle) where every line has exactly `width`
    characters and `middle` is the column the parent's connector should hit.
    """
    label = str(node.key)
    u = len(label)

    if node.left is None and node.right is None:
        return [label], u, 1, u // 2

    if node.right is None:
        lines, n, p, x = _layout(node.left)
        first = (x + 1) * " " + (n - x - 1) * "_" + label
        second = x * " " + "/" + (n - x - 1 + u) * " "
        shifted = [line + u * " " for line in lines]
        return [first, second] + shifted, n + u, p + 2, n + u // 2

    if node.left is None:
        lines, m, q, y = _layout(node.right)
        first = label + y * "_" + (m - y) * " "
        second = (u + y) * " " + "\\" + (m - y - 1) * " "
        shifted = [u * " " + line for line in lines]
        return [first, second] + shifted, m + u, q + 2, u // 2

    left, n, p, x = _layout(node.left)
    right, m, q, y = _layout(node.right)
    first = (x + 1) * " " + (n - x - 1) * "_" + label + y * "_" + (m - y) * " "
    second = x * " " + "/" + (n - x - 1 + u + y) * " " + "\\" + (m - y - 1) * " "
    # pad the shorter side so both columns zip to the same height
    left += [n * " "] * (q - p)
    right += [m * " "] * (p - q)
    lines = [first, second] + [a + u * " " + b for a, b in zip(left, right)]
    return lines, n + m + u, max(p, q) + 2, n + u // 2


def render(root: Optional[OBSTNode]) -> List[str]:
    if root is None:
        return ["<empty>"]
    lines, _, _, _ = _layout(root)
    return lines


def print_tree(root: Optional[OBSTNode], out: Optional[TextIO] = None) -> None:
    """Write the tree to `out` (stdout by default), one row of nodes per pair of lines."""
    out = out if out is not None else sys.stdout
    for line in render(root):
        out.write(line.rstrip() + "\n")

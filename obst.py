class InvalidInputError(ValueError): # raised when keys, frequencies (and values) are not positionally aligned
    pass


class OBSTNode: # Optimal Binary Search Tree Node
    def __init__(self, key, value = None, weight = 0.0):
        self.key = key # key of the node
        self.value = value # associated value (optional, can be used for storing data)
        self.weight = weight # access frequency of the key
        self.left = None
        self.right = None


class RangeTables:
    """
    Cost table W and root table R over every contiguous range of keys i..j (1-based, inclusive).

    Stored triangular and 0-based: row i-1 holds the ranges starting at key i, column j-i+1 is
    the range length. Column 0 is the empty range (cost 0.0, root None). Row n only holds the
    empty range that starts past the last key.
    """

    def __init__(self, n):
        self.n = n
        self.costs = [[0.0] * (n - row + 1) for row in range(n + 1)]
        self.roots = [[None] * (n - row + 1) for row in range(n + 1)]

    def cost(self, i, j):
        return self.costs[i - 1][j - i + 1]

    def root(self, i, j):
        return self.roots[i - 1][j - i + 1]

    def set(self, i, j, cost, root):
        self.costs[i - 1][j - i + 1] = cost
        self.roots[i - 1][j - i + 1] = root

    def __eq__(self, other):
        if not isinstance(other, RangeTables):
            return NotImplemented
        return self.n == other.n and self.costs == other.costs and self.roots == other.roots

    def __repr__(self):
        return f"RangeTables(n={self.n}, cost={self.cost(1, self.n) if self.n else 0.0})"


def prefix_sums(probabilities): # prefix[k] = p[1] + ... + p[k], prefix[0] = 0
    prefix = [0.0] * (len(probabilities) + 1)
    for k in range(1, len(probabilities) + 1):
        prefix[k] = prefix[k - 1] + probabilities[k - 1]
    return prefix


def _fill_tables(probabilities, pruned):
    n = len(probabilities)
    prefix = prefix_sums(probabilities)
    tables = RangeTables(n)

    for size in range(1, n + 1):  # length of subtree, smaller ranges are final before larger ones
        for i in range(1, n - size + 2):  # start index
            j = i + size - 1  # end index

            if i == j: # a lone key is its own root and costs exactly p[i]
                tables.set(i, j, probabilities[i - 1], i)
                continue

            if pruned:
                # Knuth: root of i..j lies between the roots of i..j-1 and i+1..j
                lo, hi = tables.root(i, j - 1), tables.root(i + 1, j)
            else:
                lo, hi = i, j

            best = float('inf')
            best_root = None
            for r in range(lo, hi + 1):
                split = tables.cost(i, r - 1) + tables.cost(r + 1, j)
                # strict: the first minimal root in scan order is kept, and lo is always recorded
                if best_root is None or split < best:
                    best = split
                    best_root = r

            tables.set(i, j, best + prefix[j] - prefix[i - 1], best_root)

    return tables


def build_tables(probabilities):
    """
    Fill the cost and root tables in O(n^2) using the monotonicity of optimal roots.

    For a root r of keys i..j every key gains one level, so
        W[i][j] = W[i][r-1] + W[r+1][j] + (p[i] + ... + p[j])
    and the range sum is a prefix-sum difference, independent of r.
    """
    return _fill_tables(probabilities, pruned=True)


def build_tables_naive(probabilities): # O(n^3) reference, scans every candidate root
    return _fill_tables(probabilities, pruned=False)


def reconstruct(tables, keys, values = None, probabilities = None):
    # Function to recursively build OBST from the root table
    def build_tree(i, j):
        if i > j:
            return None
        r = tables.root(i, j)
        node = OBSTNode(keys[r-1],
                        values[r-1] if values is not None else None,
                        probabilities[r-1] if probabilities is not None else 0.0)
        node.left = build_tree(i, r-1)
        node.right = build_tree(r+1, j)
        return node

    return build_tree(1, tables.n) # return the root of the constructed OBST


def _validate(probabilities, keys, values):
    if len(probabilities) != len(keys):
        raise InvalidInputError(
            f"Size of frequency array ({len(probabilities)}) doesn't match the number of keys ({len(keys)})")
    if values is not None and len(values) != len(keys):
        raise InvalidInputError(
            f"Size of value array ({len(values)}) doesn't match the number of keys ({len(keys)})")


def construct(probabilities, keys, values = None):
    """
    Build the optimal BST over keys (already in in-order position) for the given access frequencies.

    Returns the root OBSTNode, or None when there are no keys.
    Raises InvalidInputError if the frequencies (or values) are not aligned with the keys.
    """
    _validate(probabilities, keys, values)
    if len(keys) == 0:
        return None
    tables = build_tables(probabilities)
    return reconstruct(tables, keys, values, probabilities)


def obst_search(root: OBSTNode, key): # Search for a key in the OBST and count comparisons
    comparisons = 0
    node = root
    while node is not None:
        comparisons += 1
        if key == node.key:
            return node.value, comparisons
        elif key < node.key:
            node = node.left
        else:
            node = node.right
    return None, comparisons # return None if key not found, along with the number of comparisons made


def inorder_keys(root):
    keys = []
    def walk(node):
        if node is None:
            return
        walk(node.left)
        keys.append(node.key)
        walk(node.right)
    walk(root)
    return keys


def weighted_cost(root): # sum of weight * (depth + 1), root counts as one level
    def walk(node, level):
        if node is None:
            return 0.0
        return node.weight * level + walk(node.left, level + 1) + walk(node.right, level + 1)
    return walk(root, 1)


def tree_shape(root): # nested (key, left, right) tuples, None for an empty subtree
    if root is None:
        return None
    return (root.key, tree_shape(root.left), tree_shape(root.right))

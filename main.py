from linkedbst.tree import SearchTree

DEMO_KEYS = [5, 3, 65, 123, 6, 11, 3, 1, 5, 42]


def run_demo():
    print("--- linkedbst demo ---")
    tree = SearchTree()

    rejected = []
    for key in DEMO_KEYS:
        if not tree.insert(key, key):
            rejected.append(key)

    print(f"Inserted {len(tree)} keys, rejected duplicates: {rejected}")
    print(f"Original tree: {tree!r}")

    print(f"Node 6: {tree.find(6)!r}")

    detached = tree.detach(6)
    print(f"Original tree after detaching of node 6: {tree!r}")
    print(f"Node 6 detached: {detached!r}")
    return tree, detached


if __name__ == "__main__":
    run_demo()

import time
from ordered_tree.indexing import OrderedTree

SCENARIO_KEYS = [5, 3, 8, 1, 4, 7, 9]


def run_smoke_test():
    print("--- OrderedTree smoke test ---")
    tree = OrderedTree()

    start_time = time.time()
    for key in SCENARIO_KEYS:
        tree.insert(key, f"v{key}")
    end_time = time.time()

    print(f"Inserted {len(tree)} pairs in {end_time - start_time:.6f}s")
    print(f"Min: {tree.min()}  Max: {tree.max()}  Root: {tree.root()}")
    print("Level by level:")
    tree.level_by_level()

    tree.insert(5, "ignored")
    print(f"Duplicate insert of 5 kept value {tree.find(5)!r}, size {len(tree)}")

    tree.erase(5)
    print(f"Erased 5 -> in-order keys {list(tree)}, root {tree.root()}")
    print("Level by level:")
    tree.level_by_level()


if __name__ == "__main__":
    run_smoke_test()

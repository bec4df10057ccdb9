"""
AVL Tree Demo - Rebalancing walkthroughs, height bounds, and depth profiles.

Generates:
- viz/*.png: Individual visualization files
- report.pdf: Comprehensive PDF report
"""

import sys
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from avl_tree import AVLTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "node": "#9ecae1",
    "node_new": "coral",
    "edge": "#555555",
    "ascending": "#3498db",
    "random": "#e74c3c",
    "lower": "#27ae60",
    "upper": "#f39c12",
    "present": "steelblue",
    "absent": "coral",
}


def tree_layout(tree):
    """
    Node positions and edges computed from the public API only.

    x is the in-order rank, y is minus the depth. A node's parent is whichever
    of its nearest shallower in-order neighbours is deeper.
    """
    values = tree.in_order()
    depths = np.array([tree.depth(v) for v in values], dtype=int)
    edges = []
    for i, d in enumerate(depths):
        if d == 0:
            continue
        left = next((j for j in range(i - 1, -1, -1) if depths[j] < d), None)
        right = next((j for j in range(i + 1, len(values)) if depths[j] < d), None)
        candidates = [j for j in (left, right) if j is not None]
        edges.append((max(candidates, key=lambda j: depths[j]), i))
    return values, depths, edges


def draw_tree(ax, tree, title, highlight=None):
    values, depths, edges = tree_layout(tree)
    ax.set_title(title, fontsize=12)
    ax.axis("off")
    if not values:
        ax.text(0.5, 0.5, "(empty)", transform=ax.transAxes, ha="center", va="center")
        return

    xs = np.arange(len(values))
    ys = -depths
    for parent, child in edges:
        ax.plot([xs[parent], xs[child]], [ys[parent], ys[child]], color=COLORS["edge"], linewidth=1.5, zorder=1)

    colors = [COLORS["node_new"] if v == highlight else COLORS["node"] for v in values]
    ax.scatter(xs, ys, s=700, c=colors, edgecolors="k", zorder=2)
    for x, y, v in zip(xs, ys, values):
        ax.text(x, y, str(v), ha="center", va="center", fontsize=10, zorder=3)

    ax.set_xlim(-0.75, len(values) - 0.25)
    ax.set_ylim(ys.min() - 0.6, 0.6)


def example_1_insertion_walkthrough():
    """Insert a short sequence and draw the tree after every step."""
    print("=" * 60)
    print("Example 1: Insertion Walkthrough")
    print("=" * 60)

    sequence = [10, 20, 30, 5, 4, 15, 25]
    tree: AVLTree[int] = AVLTree()

    fig, axes = plt.subplots(1, len(sequence), figsize=(3.2 * len(sequence), 4))
    for ax, value in zip(axes, sequence):
        tree.insert(value)
        print(f"insert {value:>3}: level order {tree.level_order()}, height {tree.height()}")
        draw_tree(ax, tree, f"insert {value}", highlight=value)

    fig.suptitle("AVL Insertion: tree after each insert (new key highlighted)", fontsize=14)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_insertion_walkthrough.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '01_insertion_walkthrough.png'}")
    return {"level_order": tree.level_order(), "height": tree.height()}


def example_2_removal_walkthrough():
    """Remove keys from a complete tree, including rotations on the way back up."""
    print("\n" + "=" * 60)
    print("Example 2: Removal Walkthrough")
    print("=" * 60)

    tree: AVLTree[int] = AVLTree()
    for value in range(1, 16):
        tree.insert(value)

    removals = [8, 1, 3, 2, 5]
    fig, axes = plt.subplots(1, len(removals) + 1, figsize=(4 * (len(removals) + 1), 4))
    draw_tree(axes[0], tree, "start: 1..15 ascending")
    for ax, value in zip(axes[1:], removals):
        tree.remove(value)
        print(f"remove {value:>3}: level order {tree.level_order()}, height {tree.height()}, balanced {tree.is_balanced()}")
        draw_tree(ax, tree, f"remove {value}")

    fig.suptitle("AVL Removal: predecessor splicing and delete rebalancing", fontsize=14)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_removal_walkthrough.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '02_removal_walkthrough.png'}")
    return {"level_order": tree.level_order(), "height": tree.height(), "size": tree.size()}


def example_3_height_growth():
    """Tree height against size for ascending and shuffled insertion orders."""
    print("\n" + "=" * 60)
    print("Example 3: Height Growth")
    print("=" * 60)

    sizes = np.unique(np.logspace(0, 4, 30).astype(int))
    ascending_heights = []
    random_heights = []

    for n in sizes:
        ascending: AVLTree[int] = AVLTree()
        for value in range(n):
            ascending.insert(value)
        ascending_heights.append(ascending.height())

        shuffled: AVLTree[int] = AVLTree()
        for value in np.random.permutation(n):
            shuffled.insert(int(value))
        random_heights.append(shuffled.height())

    lower = np.floor(np.log2(sizes))
    upper = 1.44 * np.log2(sizes + 2) - 1.328

    print(f"n={sizes[-1]}: ascending height {ascending_heights[-1]}, shuffled height {random_heights[-1]}")
    print(f"bounds: {lower[-1]:.0f} <= height <= {upper[-1]:.2f}")

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(sizes, ascending_heights, "o-", color=COLORS["ascending"], linewidth=2, label="Ascending inserts")
    ax.plot(sizes, random_heights, "s-", color=COLORS["random"], linewidth=2, label="Shuffled inserts")
    ax.plot(sizes, lower, "--", color=COLORS["lower"], linewidth=2, label="floor(log2 n)")
    ax.plot(sizes, upper, "--", color=COLORS["upper"], linewidth=2, label="1.44 log2(n+2) - 1.328")
    ax.set_xscale("log")
    ax.set_xlabel("Number of keys", fontsize=12)
    ax.set_ylabel("Height (edges)", fontsize=12)
    ax.set_title("AVL Height Stays Logarithmic", fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_height_growth.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '03_height_growth.png'}")
    return {"sizes": sizes, "ascending": ascending_heights, "random": random_heights}


def example_4_depth_profile():
    """Depths of stored keys and insertion depths decoded for absent keys."""
    print("\n" + "=" * 60)
    print("Example 4: Depth Profile")
    print("=" * 60)

    n = 1023
    tree: AVLTree[int] = AVLTree()
    for value in np.random.permutation(n) * 2:
        tree.insert(int(value))

    present = np.array([tree.depth(2 * i) for i in range(n)])
    encoded = np.array([tree.depth(2 * i + 1) for i in range(n)])
    assert np.all(present >= 0) and np.all(encoded < 0)
    absent = -1 - encoded

    print(f"Stored keys: mean depth {present.mean():.3f}, max {present.max()}")
    print(f"Absent keys: mean insertion depth {absent.mean():.3f}, max {absent.max()}")

    bins = np.arange(0, max(present.max(), absent.max()) + 2) - 0.5
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.hist(present, bins=bins, alpha=0.7, color=COLORS["present"], edgecolor="k", label="depth(key), key stored")
    ax.hist(absent, bins=bins, alpha=0.7, color=COLORS["absent"], edgecolor="k", label="-1 - depth(key), key absent")
    ax.set_xlabel("Depth", fontsize=12)
    ax.set_ylabel("Count", fontsize=12)
    ax.set_title(f"Depth Distribution ({n} shuffled keys, height {tree.height()})", fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_depth_profile.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '04_depth_profile.png'}")
    return {"present_mean": present.mean(), "absent_mean": absent.mean(), "height": tree.height()}


def example_5_churn():
    """Random inserts and removals; size and height over time."""
    print("\n" + "=" * 60)
    print("Example 5: Insert/Remove Churn")
    print("=" * 60)

    key_space = 2000
    steps = 5000
    tree: AVLTree[int] = AVLTree()
    sizes = np.zeros(steps, dtype=int)
    heights = np.zeros(steps, dtype=int)

    keys = np.random.randint(0, key_space, size=steps)
    inserts = np.random.rand(steps) < 0.6
    for step, (key, is_insert) in enumerate(zip(keys, inserts)):
        if is_insert:
            tree.insert(int(key))
        else:
            tree.remove(int(key))
        sizes[step] = tree.size()
        heights[step] = tree.height()

    balanced = tree.is_balanced()
    print(f"Final size {tree.size()}, height {tree.height()}, balanced {balanced}")

    fig, ax1 = plt.subplots(figsize=(12, 6))
    ax1.plot(sizes, color=COLORS["ascending"], linewidth=1.5, label="size")
    ax1.set_xlabel("Operation", fontsize=12)
    ax1.set_ylabel("Size", fontsize=12, color=COLORS["ascending"])
    ax2 = ax1.twinx()
    ax2.plot(heights, color=COLORS["random"], linewidth=1.5, label="height")
    bound = 1.44 * np.log2(np.maximum(sizes, 1) + 2) - 1.328
    ax2.plot(bound, "--", color=COLORS["upper"], linewidth=1, label="AVL height bound")
    ax2.set_ylabel("Height", fontsize=12, color=COLORS["random"])
    ax2.legend(loc="lower right", fontsize=10)
    ax1.set_title("Size and Height Under Random Churn", fontsize=14)
    ax1.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "05_churn.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '05_churn.png'}")
    return {"final_size": tree.size(), "final_height": tree.height(), "balanced": balanced}


def generate_pdf_report(results):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = Path(__file__).parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")

        ax.text(0.5, 0.7, "AVL Tree\nComprehensive Demo Report", transform=ax.transAxes, fontsize=28,
                ha="center", va="center", fontweight="bold")

        description = (
            "A binary search tree that keeps a balance tag per node.\n"
            "Insertions and removals rotate on the way back up the search path,\n"
            "so every operation stays logarithmic in the number of keys."
        )
        ax.text(0.5, 0.45, description, transform=ax.transAxes, fontsize=14,
                ha="center", va="center", style="italic")

        ax.text(0.5, 0.2, f"Random Seed: {SEED}", transform=ax.transAxes, fontsize=12,
                ha="center", va="center")

        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")

        ax.text(0.5, 0.95, "Summary of Results", transform=ax.transAxes, fontsize=20,
                ha="center", va="top", fontweight="bold")

        summary_text = f"""
Example 1: Insertion Walkthrough
    - Final level order: {results['ex1']['level_order']}
    - Height: {results['ex1']['height']}

Example 2: Removal Walkthrough
    - Final level order: {results['ex2']['level_order']}
    - Size: {results['ex2']['size']}, height: {results['ex2']['height']}

Example 3: Height Growth
    - n={results['ex3']['sizes'][-1]}: ascending height {results['ex3']['ascending'][-1]}, shuffled height {results['ex3']['random'][-1]}

Example 4: Depth Profile
    - Mean depth of stored keys: {results['ex4']['present_mean']:.3f}
    - Mean insertion depth of absent keys: {results['ex4']['absent_mean']:.3f}

Example 5: Insert/Remove Churn
    - Final size: {results['ex5']['final_size']}, height: {results['ex5']['final_height']}
    - Balanced: {results['ex5']['balanced']}
"""
        ax.text(0.1, 0.85, summary_text, transform=ax.transAxes, fontsize=11,
                ha="left", va="top", family="monospace")

        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        viz_files = sorted(VIZ_DIR.glob("*.png"))
        for viz_file in viz_files:
            fig, ax = plt.subplots(figsize=(11, 8.5))
            img = plt.imread(viz_file)
            ax.imshow(img)
            ax.axis("off")
            ax.set_title(viz_file.stem.replace("_", " ").title(), fontsize=14, fontweight="bold")
            fig.tight_layout()
            pdf.savefig(fig)
            plt.close(fig)

    print(f"Saved: {pdf_path}")


def main():
    print("AVL Tree Demo")
    print("=" * 60)
    print(f"Random seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")
    print()

    results = {}

    results["ex1"] = example_1_insertion_walkthrough()
    results["ex2"] = example_2_removal_walkthrough()
    results["ex3"] = example_3_height_growth()
    results["ex4"] = example_4_depth_profile()
    results["ex5"] = example_5_churn()

    generate_pdf_report(results)

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)
    print(f"Visualizations saved to: {VIZ_DIR}")
    print(f"PDF report saved to: {Path(__file__).parent / 'report.pdf'}")


if __name__ == "__main__":
    main()

import matplotlib.pyplot as plt
import numpy as np

from icmkit.engine.icm import calculate_all_equities, new_memo

# --- CONFIGURATION ---
TOTAL_CHIPS = 10_000
BUBBLE_PAYOUTS = [500, 300, 200]        # 4 left, 3 paid
FINAL_TABLE_PAYOUTS = [500, 300, 200]   # 3 left, all paid
SHARES = np.linspace(0.05, 0.90, 35)


def _hero_curve(n_players, payouts):
    """Hero's ICM equity vs chip share; remaining chips split evenly."""
    memo = new_memo()
    icm, chip = [], []
    for share in SHARES:
        hero = TOTAL_CHIPS * share
        rest = (TOTAL_CHIPS - hero) / (n_players - 1)
        stacks = [hero] + [rest] * (n_players - 1)
        icm.append(calculate_all_equities(stacks, payouts, memo=memo)[0])
        chip.append(share * sum(payouts))
    return np.array(icm), np.array(chip)


# --- GRAPH 1: ICM EQUITY VS CHIP SHARE ---
def plot_equity_curves():
    plt.figure(figsize=(10, 6))
    for n, payouts, label in [
        (4, BUBBLE_PAYOUTS, "Bubble (4 left, 3 paid)"),
        (3, FINAL_TABLE_PAYOUTS, "In the money (3 left)"),
    ]:
        icm, chip = _hero_curve(n, payouts)
        plt.plot(SHARES * 100, icm, linewidth=2, label=f"ICM - {label}")
    plt.plot(SHARES * 100, SHARES * sum(BUBBLE_PAYOUTS), color="black", linestyle="--", label="Chip EV")

    plt.title("ICM Equity vs Chip Share", fontsize=14, fontweight="bold")
    plt.xlabel("Hero chip share (%)", fontsize=12)
    plt.ylabel("Equity ($)", fontsize=12)
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig("graph_icm_equity.png", dpi=300)
    print("Saved 'graph_icm_equity.png'")
    plt.show()


# --- GRAPH 2: BUBBLE FACTOR VS CHIP SHARE ---
def plot_bubble_factor():
    icm, chip = _hero_curve(4, BUBBLE_PAYOUTS)
    bf = np.where(icm > 0, chip / np.maximum(icm, 1e-12), 1.0)

    plt.figure(figsize=(10, 6))
    plt.plot(SHARES * 100, bf, color="#d62728", linewidth=2)
    plt.axhline(1.0, color="black", linestyle="--", linewidth=1, label="Chip EV = ICM")
    plt.title("Bubble Factor on the Bubble (4 left, 3 paid)", fontsize=14, fontweight="bold")
    plt.xlabel("Hero chip share (%)", fontsize=12)
    plt.ylabel("Chip EV / ICM equity", fontsize=12)
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig("graph_bubble_factor.png", dpi=300)
    print("Saved 'graph_bubble_factor.png'")
    plt.show()


# --- GRAPH 3: RISK PREMIUM PER SEAT ---
def plot_risk_premium(stacks=(4000, 3000, 2000, 1000), payouts=(500, 300, 200)):
    equities = np.array(calculate_all_equities(list(stacks), list(payouts)))
    chip = np.array(stacks, dtype=float) / sum(stacks) * sum(payouts)
    premium = chip - equities

    labels = [f"Seat {i}\n({s})" for i, s in enumerate(stacks)]
    colors = ["#2ca02c" if p < 0 else "#d62728" for p in premium]

    plt.figure(figsize=(10, 6))
    bars = plt.bar(labels, premium, color=colors, edgecolor="black", linewidth=1.5)
    plt.axhline(0, color="black", linewidth=1)
    plt.title("Risk Premium (Chip EV - ICM) by Seat", fontsize=14, fontweight="bold")
    plt.ylabel("$", fontsize=12)
    plt.grid(True, alpha=0.3, axis="y")

    for bar in bars:
        height = bar.get_height()
        plt.text(bar.get_x() + bar.get_width() / 2., height,
                 f"{height:.1f}", ha="center",
                 va="bottom" if height > 0 else "top", fontsize=9)

    plt.tight_layout()
    plt.savefig("graph_risk_premium.png", dpi=300)
    print("Saved 'graph_risk_premium.png'")
    plt.show()


# --- RUN ALL GRAPHS ---
if __name__ == "__main__":
    print("\nGenerating ICM graphs...\n")
    plot_equity_curves()
    plot_bubble_factor()
    plot_risk_premium()
    print("\nAll graphs generated.")

import io

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

sns.set_theme(style="darkgrid")

def clean_axes(ax):
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.grid(alpha=0.2)
    ax.tick_params(labelsize=9)

def completion_bar_plot(df, title="Daily completion"):
    # df from insights.days_frame
    fig, ax = plt.subplots(figsize=(8, 3.5), dpi=150)
    if df is not None and not df.empty:
        sns.barplot(data=df, x="day", y="completion", color="#16a34a", ax=ax)
    ax.set_title(title, fontsize=12)
    ax.set_ylabel("% done")
    ax.set_xlabel("Day")
    ax.set_ylim(0, 100)
    clean_axes(ax)
    fig.tight_layout()
    return fig

def figure_png(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    return buf.getvalue()

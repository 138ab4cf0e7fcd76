from pathlib import Path
from carriersim.io.results import load_sweep_csv
from carriersim.postprocess.visualization import (
    plot_carriers_vs_temperature, plot_carriers_vs_doping, plot_fermi_offset
)

def render_plot(run_dir: Path, what: str, export: Path | None):
    df = load_sweep_csv(run_dir)
    if what == "carriers":
        if df["T_K"].nunique() > 1:
            fig, _ = plot_carriers_vs_temperature(df)
        else:
            col = "ND_cm3" if df["ND_cm3"].nunique() > 1 else "NA_cm3"
            fig, _ = plot_carriers_vs_doping(df, column=col)
    elif what == "fermi":
        x = "T_K"
        for col in ("T_K", "ND_cm3", "NA_cm3"):
            if df[col].nunique() > 1:
                x = col
                break
        fig, _ = plot_fermi_offset(df, x=x)
    else:
        raise ValueError(f"Unknown plot type: {what}")
    if export:
        fig.savefig(export, dpi=180)
    else:
        import matplotlib.pyplot as plt; plt.show()
    return fig

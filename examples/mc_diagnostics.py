from __future__ import annotations


def main() -> None:
    from option_engine import PricingParameters, SimulationParameters, price_by_simulation
    from option_engine.diagnostics import (
        default_cases,
        plot_convergence_path,
        plot_sample_paths,
        run_cases,
    )
    from option_engine.pricers.analytic import bs_price

    base = PricingParameters(
        spot=100.0, strike=100.0, maturity=1.0, rate=0.05, volatility=0.20
    )

    df = run_cases(default_cases(base), n_paths=50_000, n_steps=1, seed=0)
    print(df[["case", "analytic", "mc", "se", "z", "covered"]].to_string(index=False))

    res = price_by_simulation(
        SimulationParameters(pricing=base, n_paths=20_000, n_steps=252, seed=42)
    )
    fig1, _ = plot_convergence_path(res, analytic=bs_price(base))
    fig2, _ = plot_sample_paths(res, maturity=base.maturity, n_plot=25, strike=base.strike)
    fig1.savefig("mc_convergence.png", dpi=120)
    fig2.savefig("mc_sample_paths.png", dpi=120)


if __name__ == "__main__":
    main()

# cli/demo.py   (external launch script)

import logging

from hydrocalc import (
    Fitting,
    GravityRequest,
    HydraulicCalculator,
    PressureRequest,
    StaticHeadSpec,
)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Rising main fittings, applied to every pressure request without its own
    fittings = [
        Fitting.standard("elbow_90", 6),
        Fitting.standard("gate_valve", 2),
        Fitting.standard("check_valve", 1),
        Fitting("strainer", 1, 2.0),
    ]
    calc = HydraulicCalculator(fittings=fittings)

    # Rising main: 20 L/s split over two pipes, sized for 1.5 m/s
    pressure = calc.pressure(
        PressureRequest(
            flow=20,
            flow_unit="Lps",
            mode="D_from_V",
            velocity=1.5,
            length=1.2,
            length_unit="km",
            c_factor=130,
            pipe_count=2,
            static_head=StaticHeadSpec(source_elevation=102.0, high_point_elevation=131.5),
        )
    )
    print(calc.report(pressure))
    table, total_k = calc.fitting_table(calc.fittings)
    print(table)
    print(f"ΣK = {total_k}")

    # Sewer: 300 mm concrete pipe at 0.5 %
    gravity = calc.gravity(
        GravityRequest(
            flow=35,
            flow_unit="Lps",
            mode="DD_from_D",
            n=0.013,
            slope=0.5,
            slope_unit="percent",
            diameter=300,
            diameter_unit="mm",
        )
    )
    print(calc.report(gravity))

    design = calc.gravity(
        GravityRequest(
            flow=35,
            mode="D_from_DD",
            n=0.013,
            slope=0.5,
            slope_unit="percent",
            depth_ratio=0.7,
        )
    )
    print(calc.report(design))

    calc.plot_partial_flow(calc.partial_flow_table(0.3, 0.013, 0.005))
    calc.plot_headloss(
        calc.headloss_table(0.01, 1200.0, 130.0, [0.075, 0.1, 0.125, 0.15, 0.2, 0.25])
    )


if __name__ == "__main__":
    main()

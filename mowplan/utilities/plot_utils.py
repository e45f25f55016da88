import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from mowplan.utilities.geometry_utils import map_polygon


def plot_plan(plan, output: str = 'mowing_plan.png') -> None:
    """Save a map of the perimeter, every generated pass and the mower's path."""
    fig, ax = plt.subplots(figsize=(12, 10))

    perimeter = map_polygon(plan.perimeter.coordinates)
    x, y = perimeter.exterior.xy
    ax.plot(x, y, 'r-', linewidth=2, label='Perimeter')
    ax.fill(x, y, 'r', alpha=0.1)

    for number, ring in enumerate(plan.rings):
        xi, yi = map_polygon(ring).exterior.xy
        ax.plot(xi, yi, 'b--', linewidth=0.8, label='Passes' if number == 0 else None)

    if plan.waypoints:
        lats = [wp.latitude for wp in plan.waypoints]
        lons = [wp.longitude for wp in plan.waypoints]
        ax.plot(lons, lats, 'g-', linewidth=1.5, label='Mower path')
        ax.plot(lons[0], lats[0], 'mo', markersize=10, label='Start')
        ax.plot(lons[-1], lats[-1], 'ko', markersize=10, label='End')

    ax.set_title(f'Mowing Plan ({plan.direction.name}, {plan.spacing_inches} in spacing)')
    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.axis('equal')
    fig.savefig(output, dpi=200, bbox_inches='tight')
    plt.close(fig)

import itertools
import os
import time
from datetime import datetime

from tqdm import tqdm

from config import CONFIG
from scalemap.comparison import Comparison
from scalemap.events import EventBus
from scalemap.formatting import format_distance
from scalemap.geodesic import GeodesicProjector
from scalemap.logger import logger, setup_logging
from scalemap.map_dimensions import MapDimensions
from scalemap.names import NameResolver
from scalemap.reference import ReferencePoint
from scalemap.registry import CircleRegistry
from scalemap.rendering import PdfSurface
from scalemap.scale import sphere_limit
from scalemap.session import QuantityMode, SessionBook


def main():
    # Start timing
    start_time = time.time()
    setup_logging()

    mode = QuantityMode(CONFIG.mode)
    center = (CONFIG.reference_coord[1], CONFIG.reference_coord[0])

    map_dimensions = MapDimensions.around(
        center, CONFIG.view_span_degrees, CONFIG.page_width_points
    )

    bus = EventBus()
    reference = ReferencePoint(bus, lon=center[0], lat=center[1])
    surface = PdfSurface(map_dimensions)
    projector = GeodesicProjector(
        CONFIG.planet_radius_meters, CONFIG.ring_segments, CONFIG.ring_method
    )
    registry = CircleRegistry(
        surface,
        projector,
        reference,
        names=NameResolver(),
        bus=bus,
        language=CONFIG.language,
        view=map_dimensions.transform_coords,
    )
    sessions = SessionBook(
        bus, CONFIG.reference_year, sphere_limit(CONFIG.planet_radius_meters)
    )
    comparison = Comparison(sessions[mode], registry)
    palette = itertools.cycle(CONFIG.palette)

    baseline = CONFIG.baseline
    logger.info(f"Setting {mode.value} baseline...")
    comparison.set_object1(
        baseline["value"],
        baseline["unit"],
        baseline["map_diameter_meters"],
        next(palette),
        baseline["label"],
    )
    if not comparison.session.is_set:
        logger.error("Baseline is invalid, nothing to compare against")
        return

    for target in tqdm(CONFIG.targets, desc="Projecting objects"):
        result = comparison.add_object2(
            target["value"], target["unit"], next(palette), target["label"]
        )
        name = registry.names.resolve(target["label"], CONFIG.language)
        projection = result["projection"]
        if projection["too_large"]:
            required = projection["required_baseline_meters"]
            hint = ""
            if required is not None:
                value, unit = format_distance(required)
                hint = f" (fits with a baseline of {value} {unit})"
            logger.warning(f"{name}: too large for the globe{hint}")
        else:
            value, unit = format_distance(projection["radius_meters"])
            logger.info(f"{name}: radius {value} {unit}")

    # Generate timestamp for the output file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = os.path.join(CONFIG.output_dir, f"scale_map_{timestamp}.pdf")
    os.makedirs(CONFIG.output_dir, exist_ok=True)
    surface.save(output_path)

    end_time = time.time()
    execution_time = end_time - start_time
    logger.info(f"Generated map at: {output_path}")
    logger.info(f"Total execution time: {execution_time:.2f} seconds")


if __name__ == "__main__":
    main()

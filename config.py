"""
Configuration settings for the ray tracer
"""
import logging

# Geometry settings
GEOMETRY_SETTINGS = {
    'epsilon': 1e-5,  # shared tolerance for float comparisons and acne offsets
}

# Rendering settings
RENDER_SETTINGS = {
    'fuel': 5,            # reflection/refraction bounces allowed per camera ray
    'workers': 1,         # 1 renders in-process, >1 uses a process pool
    'rows_per_chunk': 4,
}

# Logging settings
LOGGING_SETTINGS = {
    'level': 'INFO',
    'format': '%(asctime)s %(name)s %(levelname)s: %(message)s',
}

EPSILON = GEOMETRY_SETTINGS['epsilon']
FUEL = RENDER_SETTINGS['fuel']


def configure_logging(level: str = None):
    """Apply LOGGING_SETTINGS to the root logger"""
    logging.basicConfig(
        level=level or LOGGING_SETTINGS['level'],
        format=LOGGING_SETTINGS['format'],
    )

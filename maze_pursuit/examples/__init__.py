from .example_levels import (
    EXAMPLE_LEVELS,
    create_walled_corridor_level,
    create_adjacent_capture_level,
    create_dead_end_level,
    create_sealed_cell_level,
    create_open_room_level,
    create_pillar_room_level,
    demo_level,
)

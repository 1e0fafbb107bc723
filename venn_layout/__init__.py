from .types import (
    Arc,
    BisectError,
    Circle,
    IntersectionPoint,
    LayoutError,
    Point2D,
    Region,
    RegionKey,
    SimplexPoint,
    Solution,
    Stats,
    TextCentre,
    VectorShapeError,
)
from .geometry import (
    SMALL,
    circle_area,
    circle_circle_intersection,
    circle_overlap,
    distance,
    get_center,
    intersection_area,
)
from .optimize import (
    ConjugateGradientParams,
    MinimizeResult,
    NelderMeadParams,
    bisect,
    conjugate_gradient,
    nelder_mead,
)
from .layout import (
    LayoutOptions,
    LayoutResult,
    compute_layout,
    get_layout_options,
    log_ratio_loss_function,
    loss_function,
    set_layout_options,
    solve_layout,
)
from .orientation import normalize_and_scale, normalize_solution, scale_solution
from .labels import compute_label_anchors, compute_text_centre, compute_text_centres
from .paths import circle_from_path, circle_path, intersection_area_path
from .diagram import Diagram, DiagramOptions, compute_diagram

__all__ = [
    'Arc',
    'BisectError',
    'Circle',
    'IntersectionPoint',
    'LayoutError',
    'Point2D',
    'Region',
    'RegionKey',
    'SimplexPoint',
    'Solution',
    'Stats',
    'TextCentre',
    'VectorShapeError',
    'SMALL',
    'circle_area',
    'circle_circle_intersection',
    'circle_overlap',
    'distance',
    'get_center',
    'intersection_area',
    'ConjugateGradientParams',
    'MinimizeResult',
    'NelderMeadParams',
    'bisect',
    'conjugate_gradient',
    'nelder_mead',
    'LayoutOptions',
    'LayoutResult',
    'compute_layout',
    'get_layout_options',
    'log_ratio_loss_function',
    'loss_function',
    'set_layout_options',
    'solve_layout',
    'normalize_and_scale',
    'normalize_solution',
    'scale_solution',
    'compute_label_anchors',
    'compute_text_centre',
    'compute_text_centres',
    'circle_from_path',
    'circle_path',
    'intersection_area_path',
    'Diagram',
    'DiagramOptions',
    'compute_diagram',
]

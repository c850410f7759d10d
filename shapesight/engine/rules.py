"""Shape classification rules.

Vertex count from Douglas-Peucker is the primary cue but it is noisy under
discretisation and rotation, so each vertex-count stage carries secondary
tests that redirect miscounted shapes before the count-agnostic
concavity/roundness rules run:

  V == 3   circle (round) → rectangle (degraded corners) → triangle
  V == 4   triangle (extra vertex) → rectangle
  V 5..7   rectangle (rotated) → pentagon
  V >= 5   star (low solidity)
  any      circle (circularity > 0.90)
  V > 6    circle (many vertices, fairly round)

All thresholds are fixed, hand-tuned constants.
"""

from __future__ import annotations

from shapesight.engine.registry import Stage, rule
from shapesight.engine.types import ShapeFeatures, ShapeType

# --- Three vertices ---
_V3_CIRC_ROUND = 0.60          # above this a 3-vertex blob is a degraded circle
_V3_EXTENT_FILLED = 0.45       # a triangle fills about half its bbox
_V3_ASPECT_SQUAREISH_LO = 0.85
_V3_ASPECT_SQUAREISH_HI = 1.15
_V3_ASPECT_SQUARE_LO = 0.90
_V3_ASPECT_SQUARE_HI = 1.10

# --- Four vertices ---
_V4_EXTENT_TRIANGLE = 0.55
_V4_CIRC_TRIANGLE = 0.70
_V4_EXTENT_RECT = 0.45
_V4_ASPECT_SQUARE_LO = 0.85
_V4_ASPECT_SQUARE_HI = 1.15
_V4_RECT_BASE = 0.90
_V4_SQUARE_BONUS = 0.06
_V4_RECT_BONUS = 0.03

# --- Five to seven vertices ---
_V5_EXTENT_RECT = 0.60
_V5_CIRC_RECT = 0.80
_V5_SOLIDITY_RECT = 0.85
_PENTAGON_CIRC_LO = 0.70
_PENTAGON_CIRC_HI = 0.92
_PENTAGON_SOLIDITY = 0.80

# --- Concave ---
_STAR_MIN_VERTICES = 5
_STAR_SOLIDITY = 0.70
_STAR_CIRC_LO = 0.35
_STAR_CIRC_HI = 0.90

# --- Round ---
_CIRCLE_CIRC = 0.90
_CIRCLE_BASE = 0.92
_CIRCLE_BONUS_CAP = 0.06
_CIRCLE_BONUS_SLOPE = 0.3
_FALLBACK_MIN_VERTICES = 6     # strictly more than this
_FALLBACK_CIRC = 0.80


@rule(
    id="R0.01",
    stage=Stage.THREE_VERTICES,
    shape=ShapeType.CIRCLE,
    confidence=0.85,
    description="Three vertices but round: a circle simplified too hard",
)
def three_vertex_circle(f: ShapeFeatures) -> bool:
    return f.vertices == 3 and f.circularity > _V3_CIRC_ROUND


@rule(
    id="R0.02",
    stage=Stage.THREE_VERTICES,
    shape=ShapeType.RECTANGLE,
    confidence=0.83,
    description="Three vertices, fills its bbox, not square: degraded rectangle",
)
def three_vertex_rectangle(f: ShapeFeatures) -> bool:
    return (
        f.vertices == 3
        and f.extent > _V3_EXTENT_FILLED
        and f.circularity < _V3_CIRC_ROUND
        and (f.aspect_ratio < _V3_ASPECT_SQUAREISH_LO or f.aspect_ratio > _V3_ASPECT_SQUAREISH_HI)
    )


@rule(
    id="R0.03",
    stage=Stage.THREE_VERTICES,
    shape=ShapeType.RECTANGLE,
    confidence=0.85,
    description="Three vertices, fills its bbox, square aspect: degraded square",
)
def three_vertex_square(f: ShapeFeatures) -> bool:
    return (
        f.vertices == 3
        and _V3_ASPECT_SQUARE_LO < f.aspect_ratio < _V3_ASPECT_SQUARE_HI
        and f.extent > _V3_EXTENT_FILLED
        and f.circularity < _V3_CIRC_ROUND
    )


@rule(id="R0.04", stage=Stage.THREE_VERTICES, shape=ShapeType.TRIANGLE, confidence=0.90)
def triangle(f: ShapeFeatures) -> bool:
    """Three vertices"""
    return f.vertices == 3


@rule(
    id="R1.01",
    stage=Stage.FOUR_VERTICES,
    shape=ShapeType.TRIANGLE,
    confidence=0.88,
    description="Four vertices but sparse and angular: triangle with an extra vertex",
)
def four_vertex_triangle(f: ShapeFeatures) -> bool:
    return f.vertices == 4 and f.extent < _V4_EXTENT_TRIANGLE and f.circularity < _V4_CIRC_TRIANGLE


def _quadrilateral_confidence(f: ShapeFeatures) -> float:
    if _V4_ASPECT_SQUARE_LO < f.aspect_ratio < _V4_ASPECT_SQUARE_HI:
        return _V4_RECT_BASE + _V4_SQUARE_BONUS
    return _V4_RECT_BASE + _V4_RECT_BONUS


@rule(
    id="R1.02",
    stage=Stage.FOUR_VERTICES,
    shape=ShapeType.RECTANGLE,
    confidence=_quadrilateral_confidence,
    description="Four vertices filling its bbox",
)
def quadrilateral(f: ShapeFeatures) -> bool:
    return f.vertices == 4 and f.extent > _V4_EXTENT_RECT


@rule(
    id="R2.01",
    stage=Stage.FIVE_TO_SEVEN_VERTICES,
    shape=ShapeType.RECTANGLE,
    confidence=0.87,
    description="Five vertices, solid and boxy: rotated rectangle",
)
def rotated_rectangle(f: ShapeFeatures) -> bool:
    return (
        f.vertices == 5
        and f.extent > _V5_EXTENT_RECT
        and f.circularity < _V5_CIRC_RECT
        and f.solidity > _V5_SOLIDITY_RECT
    )


@rule(
    id="R2.02",
    stage=Stage.FIVE_TO_SEVEN_VERTICES,
    shape=ShapeType.PENTAGON,
    confidence=0.90,
    description="Five to seven vertices, fairly round and solid",
)
def pentagon(f: ShapeFeatures) -> bool:
    return (
        5 <= f.vertices <= 7
        and _PENTAGON_CIRC_LO < f.circularity < _PENTAGON_CIRC_HI
        and f.solidity > _PENTAGON_SOLIDITY
    )


@rule(
    id="R3.01",
    stage=Stage.CONCAVE,
    shape=ShapeType.STAR,
    confidence=0.88,
    description="Many vertices with a mostly empty convex envelope",
)
def star(f: ShapeFeatures) -> bool:
    return (
        f.vertices >= _STAR_MIN_VERTICES
        and f.solidity < _STAR_SOLIDITY
        and _STAR_CIRC_LO <= f.circularity <= _STAR_CIRC_HI
    )


def _circle_confidence(f: ShapeFeatures) -> float:
    return _CIRCLE_BASE + min(_CIRCLE_BONUS_CAP, (f.circularity - _CIRCLE_CIRC) * _CIRCLE_BONUS_SLOPE)


@rule(
    id="R4.01",
    stage=Stage.ROUND,
    shape=ShapeType.CIRCLE,
    confidence=_circle_confidence,
    description="Circularity above 0.90",
)
def circle(f: ShapeFeatures) -> bool:
    return f.circularity > _CIRCLE_CIRC


@rule(
    id="R5.01",
    stage=Stage.FALLBACK,
    shape=ShapeType.CIRCLE,
    confidence=0.88,
    description="More than six vertices and circularity above 0.80",
)
def many_vertex_circle(f: ShapeFeatures) -> bool:
    return f.vertices > _FALLBACK_MIN_VERTICES and f.circularity > _FALLBACK_CIRC

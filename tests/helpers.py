"""Synthetic hand frames, with y growing toward the bottom of the frame.

The palm centroid (mean of wrist, index MCP and pinky MCP) is at `palm_x` horizontally.
Extended fingers are perfectly straight (180 degrees), curled fingers fold back on
themselves (0 degree), so thresholds are never on the edge.
"""

from __future__ import annotations

from collections.abc import Iterable

from handsfree_gestures.models import HandFrame, Landmark

FINGERS = ("thumb", "index", "middle", "ring", "pinky")

# Horizontal offsets of the finger bases from the palm center
FINGER_BASES_OFFSETS = {"index": -0.05, "middle": -0.017, "ring": 0.017, "pinky": 0.05}

MCP_Y = 0.6
WRIST_Y = 0.8


def _finger(base_x: float, pose: str) -> list[Landmark]:
    """MCP, PIP, DIP and TIP landmarks of a non-thumb finger."""
    if pose == "up":
        ys = (MCP_Y, 0.5, 0.45, 0.4)
        return [Landmark(base_x, y) for y in ys]
    if pose == "down":
        ys = (MCP_Y, 0.7, 0.75, 0.8)
        return [Landmark(base_x, y) for y in ys]
    if pose == "bent":  # Right angle at the PIP joint
        return [Landmark(base_x, MCP_Y), Landmark(base_x, 0.5), Landmark(base_x + 0.05, 0.5), Landmark(base_x + 0.1, 0.5)]
    # curled
    ys = (MCP_Y, 0.5, 0.55, 0.58)
    return [Landmark(base_x, y) for y in ys]


def _thumb(palm_x: float, pose: str) -> list[Landmark]:
    """CMC, MCP, IP and TIP landmarks of the thumb."""
    cmc = Landmark(palm_x - 0.08, 0.75)
    mcp = Landmark(palm_x - 0.12, 0.7)
    if pose == "side":  # Extended, tip below the tip of a raised index
        return [cmc, mcp, Landmark(palm_x - 0.16, 0.65), Landmark(palm_x - 0.2, 0.6)]
    if pose == "up":  # Extended, tip above the tip of a raised index
        return [cmc, mcp, Landmark(palm_x - 0.16, 0.5), Landmark(palm_x - 0.2, 0.3)]
    # folded
    return [cmc, mcp, Landmark(palm_x - 0.1, 0.72), Landmark(palm_x - 0.09, 0.73)]


def make_frame(
    extended: Iterable[str] = (),
    score: float = 0.9,
    palm_x: float = 0.5,
    thumb: str | None = None,
    fingers_pose: str = "up",
    overrides: dict[str, str] | None = None,
) -> HandFrame:
    """Build a frame where the fingers named in `extended` are extended.

    Args:
        extended: Names of the extended fingers, among `FINGERS`
        score: The hand score
        palm_x: Horizontal position of the palm centroid
        thumb: Pose of the thumb ("folded", "side" or "up"), default to "side" if the thumb
            is in `extended`, else "folded"
        fingers_pose: Pose of the extended non-thumb fingers, "up" or "down"
        overrides: Force the pose of some non-thumb fingers ("up", "down", "curled", "bent")
    """
    extended = set(extended)
    if thumb is None:
        thumb = "side" if "thumb" in extended else "folded"

    keypoints = [Landmark(palm_x, WRIST_Y)]
    keypoints += _thumb(palm_x, thumb)
    for name, offset in FINGER_BASES_OFFSETS.items():
        pose = fingers_pose if name in extended else "curled"
        if overrides and name in overrides:
            pose = overrides[name]
        keypoints += _finger(palm_x + offset, pose)

    return HandFrame(keypoints=tuple(keypoints), hand_score=score)


OPEN_HAND = ("index", "middle", "ring", "pinky")

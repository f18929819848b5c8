"""Scene objects, geometry, and the minimal scene container the core works against."""

import math
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from .keyframes import TransformProps

if TYPE_CHECKING:
    from .flood_fill import FillRegion

OBJECT_KINDS = ("rectangle", "circle", "text", "path", "group")

DEFAULT_FILL_COLORS = {
    "rectangle": "#3b82f6",
    "circle": "#ef4444",
    "text": "#000000",
}

# Rotation handle sits this many pixels above the top edge by default.
DEFAULT_HANDLE_OFFSET = -40.0


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in scene coordinates."""
    left: float
    top: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, x: float, y: float) -> bool:
        return (self.left <= x <= self.left + self.width
                and self.top <= y <= self.top + self.height)

    def to_dict(self) -> Dict[str, float]:
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class RotationHandle:
    """
    Per-object rotation control.

    x, y are in handle space [-0.5, 0.5] relative to the object's box;
    offset_y is an extra pixel offset (the default handle floats above
    the top edge).
    """
    x: float = 0.0
    y: float = -0.5
    offset_y: float = DEFAULT_HANDLE_OFFSET
    action: str = "rotate"


@dataclass(frozen=True)
class PathPayload:
    path_data: str
    stroke_color: str = "#000000"
    stroke_width: float = 3.0


@dataclass(frozen=True)
class TextPayload:
    text: str = "Text"
    font_size: float = 24.0


@dataclass(frozen=True)
class GroupPayload:
    children: Tuple[str, ...] = ()


Payload = Union[PathPayload, TextPayload, GroupPayload, None]


@dataclass(frozen=True)
class SceneObject:
    """
    One animatable object.

    kind tags which payload applies. (x, y) is where the origin point
    (origin_x, origin_y as fractions of the box) sits in the scene, so
    the stored position changes meaning whenever the origin moves.
    """
    id: str
    kind: str
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    opacity: float = 1.0
    origin_x: float = 0.5
    origin_y: float = 0.5
    centered_rotation: bool = True
    rotation_handle: RotationHandle = field(default_factory=RotationHandle)
    fill: Optional[str] = None
    payload: Payload = None

    @property
    def anchor(self) -> Tuple[float, float]:
        return (self.origin_x, self.origin_y)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "type": self.kind,
            "name": self.name,
            "left": self.x,
            "top": self.y,
            "width": self.width,
            "height": self.height,
            "scaleX": self.scale_x,
            "scaleY": self.scale_y,
            "angle": self.rotation,
            "opacity": self.opacity,
            "anchorX": self.origin_x,
            "anchorY": self.origin_y,
            "centeredRotation": self.centered_rotation,
            "rotationHandle": {
                "x": self.rotation_handle.x,
                "y": self.rotation_handle.y,
                "offsetY": self.rotation_handle.offset_y,
                "action": self.rotation_handle.action,
            },
            "fill": self.fill,
        }
        if isinstance(self.payload, PathPayload):
            data["pathData"] = self.payload.path_data
            data["strokeColor"] = self.payload.stroke_color
            data["strokeWidth"] = self.payload.stroke_width
        elif isinstance(self.payload, TextPayload):
            data["text"] = self.payload.text
            data["fontSize"] = self.payload.font_size
        elif isinstance(self.payload, GroupPayload):
            data["children"] = list(self.payload.children)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SceneObject":
        kind = data.get("type", "rectangle")
        if kind not in OBJECT_KINDS:
            raise ValueError(f"Unknown object type: {kind!r}")

        payload: Payload = None
        if kind == "path":
            payload = PathPayload(
                path_data=data.get("pathData", ""),
                stroke_color=data.get("strokeColor", "#000000"),
                stroke_width=float(data.get("strokeWidth", 3.0)),
            )
        elif kind == "text":
            payload = TextPayload(
                text=data.get("text", "Text"),
                font_size=float(data.get("fontSize", 24.0)),
            )
        elif kind == "group":
            payload = GroupPayload(children=tuple(data.get("children", ())))

        handle = data.get("rotationHandle") or {}
        return cls(
            id=str(data["id"]),
            kind=kind,
            name=data.get("name", ""),
            x=float(data.get("left", 0.0)),
            y=float(data.get("top", 0.0)),
            width=float(data.get("width", 100.0)),
            height=float(data.get("height", 100.0)),
            scale_x=float(data.get("scaleX", 1.0)),
            scale_y=float(data.get("scaleY", 1.0)),
            rotation=float(data.get("angle", 0.0)),
            opacity=float(data.get("opacity", 1.0)),
            origin_x=float(data.get("anchorX", 0.5)),
            origin_y=float(data.get("anchorY", 0.5)),
            centered_rotation=bool(data.get("centeredRotation", True)),
            rotation_handle=RotationHandle(
                x=float(handle.get("x", 0.0)),
                y=float(handle.get("y", -0.5)),
                offset_y=float(handle.get("offsetY", DEFAULT_HANDLE_OFFSET)),
                action=handle.get("action", "rotate"),
            ),
            fill=data.get("fill", DEFAULT_FILL_COLORS.get(kind)),
            payload=payload,
        )


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_object(kind: str, object_id: str, name: str = "", text: str = "Text") -> SceneObject:
    """Create a shape with the editor defaults, centred at (100, 100)."""
    if kind == "rectangle":
        return SceneObject(id=object_id, kind=kind, name=name, x=100.0, y=100.0,
                           width=100.0, height=100.0, fill=DEFAULT_FILL_COLORS[kind])
    if kind == "circle":
        return SceneObject(id=object_id, kind=kind, name=name, x=100.0, y=100.0,
                           width=100.0, height=100.0, fill=DEFAULT_FILL_COLORS[kind])
    if kind == "text":
        font_size = 24.0
        # Approximate glyph metrics; the host replaces these with measured ones.
        return SceneObject(id=object_id, kind=kind, name=name, x=100.0, y=100.0,
                           width=0.6 * font_size * max(1, len(text)),
                           height=1.16 * font_size,
                           fill=DEFAULT_FILL_COLORS[kind],
                           payload=TextPayload(text=text, font_size=font_size))
    raise ValueError(f"Use create_path_from_points / create_group for {kind!r}")


def create_path_from_points(
    points: List[Tuple[float, float]],
    object_id: str,
    color: str = "#000000",
    stroke_width: float = 3.0,
    smoothing: bool = True,
    name: str = "",
) -> Optional[SceneObject]:
    """
    Create a path object from drawn points.

    With smoothing, interior points become quadratic control points with
    the curve passing through midpoints. Fewer than two points yields None.
    """
    if len(points) < 2:
        return None

    parts = [f"M {points[0][0]} {points[0][1]}"]
    if smoothing and len(points) > 2:
        for i in range(1, len(points) - 1):
            xc = (points[i][0] + points[i + 1][0]) / 2
            yc = (points[i][1] + points[i + 1][1]) / 2
            parts.append(f"Q {points[i][0]} {points[i][1]}, {xc} {yc}")
        parts.append(f"L {points[-1][0]} {points[-1][1]}")
    else:
        for px, py in points[1:]:
            parts.append(f"L {px} {py}")

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    return SceneObject(
        id=object_id,
        kind="path",
        name=name,
        x=(min_x + max_x) / 2,
        y=(min_y + max_y) / 2,
        width=max_x - min_x + stroke_width,
        height=max_y - min_y + stroke_width,
        fill=None,
        payload=PathPayload(path_data=" ".join(parts), stroke_color=color,
                            stroke_width=stroke_width),
    )


def create_group(object_id: str, members: List[SceneObject], name: str = "") -> SceneObject:
    """Group members under one object whose box is the union of theirs."""
    boxes = [bounding_box(m) for m in members]
    left = min(b.left for b in boxes)
    top = min(b.top for b in boxes)
    right = max(b.left + b.width for b in boxes)
    bottom = max(b.top + b.height for b in boxes)
    return SceneObject(
        id=object_id,
        kind="group",
        name=name,
        x=(left + right) / 2,
        y=(top + bottom) / 2,
        width=right - left,
        height=bottom - top,
        payload=GroupPayload(children=tuple(m.id for m in members)),
    )


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def rotate_point(dx: float, dy: float, angle: float) -> Tuple[float, float]:
    """Rotate an offset by angle degrees (clockwise in screen space)."""
    rad = math.radians(angle)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    return (dx * cos_a - dy * sin_a, dx * sin_a + dy * cos_a)


def _local_offset(obj: SceneObject, fx: float, fy: float) -> Tuple[float, float]:
    """Scene offset from the origin point to the box point at fraction (fx, fy)."""
    dx = (fx - obj.origin_x) * obj.width * obj.scale_x
    dy = (fy - obj.origin_y) * obj.height * obj.scale_y
    return rotate_point(dx, dy, obj.rotation)


def visual_center(obj: SceneObject) -> Tuple[float, float]:
    """Scene position of the box centre, independent of the origin convention."""
    dx, dy = _local_offset(obj, 0.5, 0.5)
    return (obj.x + dx, obj.y + dy)


def position_for_center(obj: SceneObject, center: Tuple[float, float]) -> Tuple[float, float]:
    """Origin position that puts the box centre at center with obj's current origin."""
    dx, dy = _local_offset(obj, 0.5, 0.5)
    return (center[0] - dx, center[1] - dy)


def corners(obj: SceneObject) -> List[Tuple[float, float]]:
    result = []
    for fx, fy in ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)):
        dx, dy = _local_offset(obj, fx, fy)
        result.append((obj.x + dx, obj.y + dy))
    return result


def bounding_box(obj: SceneObject) -> BoundingBox:
    """Axis-aligned bounding box of the transformed object."""
    pts = corners(obj)
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    return BoundingBox(left=min(xs), top=min(ys), width=max(xs) - min(xs), height=max(ys) - min(ys))


def apply_transform(obj: SceneObject, props: TransformProps) -> SceneObject:
    """Return obj with the animatable fields taken from props."""
    return replace(
        obj,
        x=props.x,
        y=props.y,
        scale_x=props.scale_x,
        scale_y=props.scale_y,
        rotation=props.rotation,
        opacity=props.opacity,
    )


def extract_properties(obj: SceneObject) -> TransformProps:
    """Snapshot obj's animatable fields, e.g. to record a keyframe."""
    return TransformProps(
        x=obj.x,
        y=obj.y,
        scale_x=obj.scale_x,
        scale_y=obj.scale_y,
        rotation=obj.rotation,
        opacity=obj.opacity,
    )


# ---------------------------------------------------------------------------
# Scene container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Scene:
    """
    Objects, their stacking order (back to front), and attached fills.

    Every mutator returns a new Scene.
    """
    objects: Dict[str, SceneObject] = field(default_factory=dict)
    order: Tuple[str, ...] = ()
    fills: Tuple["FillRegion", ...] = ()

    def get(self, object_id: str) -> Optional[SceneObject]:
        return self.objects.get(object_id)

    def get_bounding_box(self, object_id: str) -> BoundingBox:
        return bounding_box(self.objects[object_id])

    def get_position(self, object_id: str) -> Tuple[float, float]:
        return visual_center(self.objects[object_id])

    def set_transform(self, object_id: str, props: TransformProps) -> "Scene":
        obj = self.objects.get(object_id)
        if obj is None:
            return self
        return self.replace_object(apply_transform(obj, props))

    def replace_object(self, obj: SceneObject) -> "Scene":
        objects = dict(self.objects)
        objects[obj.id] = obj
        return replace(self, objects=objects)

    def add_object(self, obj: SceneObject) -> "Scene":
        """Add obj on top of the stack."""
        objects = dict(self.objects)
        objects[obj.id] = obj
        order = tuple(i for i in self.order if i != obj.id) + (obj.id,)
        return replace(self, objects=objects, order=order)

    def remove_object(self, object_id: str) -> "Scene":
        """Remove an object together with the fills it owns."""
        objects = {k: v for k, v in self.objects.items() if k != object_id}
        order = tuple(i for i in self.order if i != object_id)
        fills = tuple(f for f in self.fills if f.source_shape_id != object_id)
        return replace(self, objects=objects, order=order, fills=fills)

    def objects_containing(self, x: float, y: float) -> List[SceneObject]:
        """Objects whose bounding box contains (x, y), smallest area first."""
        hits = [obj for obj in self.objects.values() if bounding_box(obj).contains(x, y)]
        return sorted(hits, key=lambda obj: bounding_box(obj).area)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "objects": [self.objects[i].to_dict() for i in self.order if i in self.objects],
            "order": list(self.order),
            "fills": [f.to_dict() for f in self.fills],
        }


__all__ = [
    "OBJECT_KINDS",
    "BoundingBox",
    "RotationHandle",
    "PathPayload",
    "TextPayload",
    "GroupPayload",
    "SceneObject",
    "Scene",
    "create_object",
    "create_path_from_points",
    "create_group",
    "rotate_point",
    "visual_center",
    "position_for_center",
    "corners",
    "bounding_box",
    "apply_transform",
    "extract_properties",
]

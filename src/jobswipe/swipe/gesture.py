"""
手势判定：水平位移 → 接受 / 拒绝 / 无（回弹）。

classify 为纯函数，与动画、渲染解耦；GestureState 只记录拖拽过程中的位移及由位移
推导出的旋转、透明度（纯展示用，不参与任何不变量）。
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """决定方向：ACCEPT 对应投递（右滑），REJECT 对应跳过（左滑）。"""
    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def swipe(self) -> str:
        """映射为存储层的滑动方向 right / left。"""
        return "right" if self is Direction.ACCEPT else "left"

    @classmethod
    def from_swipe(cls, value: str) -> "Direction":
        v = (value or "").strip().lower()
        if v in ("right", "accept", "apply"):
            return cls.ACCEPT
        if v in ("left", "reject", "pass"):
            return cls.REJECT
        raise ValueError(f"unknown swipe direction: {value!r}")


# 按钮触发时使用的合成退出位移（仅用于动画）
EXIT_OFFSET = 1000.0

# 与原型一致：位移 [-200, 200] 对应旋转 [-25°, 25°]
_ROTATE_INPUT = (-200.0, 200.0)
_ROTATE_OUTPUT = (-25.0, 25.0)
_OPACITY_INPUT = (-200.0, -150.0, 0.0, 150.0, 200.0)
_OPACITY_OUTPUT = (0.5, 1.0, 1.0, 1.0, 0.5)


def classify(displacement: float, threshold: float) -> Direction | None:
    """
    按位移与阈值判定方向：|displacement| > threshold 时正为 ACCEPT、负为 REJECT；
    否则返回 None（视为取消，卡片回弹）。恰好等于阈值不提交。
    """
    if abs(displacement) > threshold:
        return Direction.ACCEPT if displacement > 0 else Direction.REJECT
    return None


def exit_offset(direction: Direction) -> float:
    return EXIT_OFFSET if direction is Direction.ACCEPT else -EXIT_OFFSET


def _interpolate(x: float, inputs: tuple[float, ...], outputs: tuple[float, ...]) -> float:
    """分段线性插值，超出输入范围时取端点值。"""
    if x <= inputs[0]:
        return outputs[0]
    if x >= inputs[-1]:
        return outputs[-1]
    for i in range(1, len(inputs)):
        if x <= inputs[i]:
            x0, x1 = inputs[i - 1], inputs[i]
            y0, y1 = outputs[i - 1], outputs[i]
            return y0 + (y1 - y0) * (x - x0) / (x1 - x0)
    return outputs[-1]


@dataclass
class GestureState:
    """一次拖拽中的瞬时状态；delta_x 为当前水平位移。"""
    delta_x: float = 0.0
    active: bool = False
    threshold: float = 100.0

    @property
    def rotation(self) -> float:
        return _interpolate(self.delta_x, _ROTATE_INPUT, _ROTATE_OUTPUT)

    @property
    def opacity(self) -> float:
        return _interpolate(self.delta_x, _OPACITY_INPUT, _OPACITY_OUTPUT)

    @property
    def crossed(self) -> bool:
        """是否已越过阈值（松手即提交）。"""
        return classify(self.delta_x, self.threshold) is not None

    @property
    def is_neutral(self) -> bool:
        return not self.active and self.delta_x == 0.0

    def clear(self) -> None:
        self.delta_x = 0.0
        self.active = False

    def to_dict(self) -> dict:
        return {
            "delta_x": self.delta_x,
            "active": self.active,
            "rotation": round(self.rotation, 2),
            "opacity": round(self.opacity, 3),
            "crossed": self.crossed,
        }

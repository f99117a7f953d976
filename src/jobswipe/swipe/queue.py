"""
滑卡决策队列：在有序候选列表上维护「当前卡片」游标，把手势或按钮操作转换为决定并发出，
随后前进一格；支持回看上一张（undo）与整体替换列表（reset）。

游标不变量：0 <= cursor <= len(candidates)；cursor == len 表示已看完。
决定一经发出不可撤回：undo 只回退游标，不会撤销 sink 已执行的外部效果；
撤回后再次提交会对同一候选发出第二个独立决定，是否覆盖由下游决定。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from .gesture import Direction, GestureState, classify, exit_offset

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SwipeError(RuntimeError):
    """滑卡队列错误基类。"""


class EmptyQueueError(SwipeError):
    """在没有当前候选时提交决定：调用方未先检查 current()，属于编程错误。"""


@dataclass(frozen=True)
class Decision:
    """对某个候选做出的决定，只携带候选标识与方向。"""
    candidate_id: str
    direction: Direction

    def to_dict(self) -> dict:
        return {"candidate_id": self.candidate_id, "direction": self.direction.value}


DecisionSink = Callable[[Decision], Any]


def candidate_id(candidate: Any) -> str:
    """取候选的稳定标识：优先 id 属性，其次映射中的 "id" 键。"""
    if isinstance(candidate, dict):
        return str(candidate["id"])
    return str(getattr(candidate, "id"))


class DecisionQueue(Generic[T]):
    """
    单线程、同步的决策队列；一个实例只属于一个会话。

    candidates: 初始候选列表（队列只读，不检查字段）
    sink: 接收 Decision 的回调，提交时在游标前进之前调用
    threshold: 手势阈值（像素）
    """

    def __init__(
        self,
        candidates: Sequence[T] = (),
        sink: DecisionSink | None = None,
        threshold: float = 100.0,
        key: Callable[[T], str] = candidate_id,
    ):
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self._candidates: list[T] = list(candidates)
        self._sink = sink
        self._key = key
        self._cursor = 0
        self.threshold = threshold
        self.gesture = GestureState(threshold=threshold)
        # 最近一次提交的退出位移，仅供展示层做飞出动画
        self.last_exit_x = 0.0

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._candidates)

    def current(self) -> T | None:
        if self.exhausted:
            return None
        return self._candidates[self._cursor]

    def peek_next(self) -> T | None:
        """下一张（供展示层渲染叠在下面的预览卡）。"""
        nxt = self._cursor + 1
        if nxt < len(self._candidates):
            return self._candidates[nxt]
        return None

    def commit(self, direction: Direction, displacement: float | None = None) -> Decision:
        """
        对当前候选提交决定：先把 Decision 交给 sink，再前进。
        sink 抛错时游标照常前进，异常继续向上抛出。
        """
        current = self.current()
        if current is None:
            raise EmptyQueueError("commit called on an exhausted queue")

        decision = Decision(candidate_id=self._key(current), direction=direction)
        self.last_exit_x = displacement if displacement is not None else exit_offset(direction)
        logger.debug("commit %s at cursor=%d", decision, self._cursor)
        try:
            if self._sink is not None:
                self._sink(decision)
        finally:
            self.advance()
        return decision

    def advance(self) -> None:
        """游标 +1，到末尾后不再变化；同时清空手势状态。"""
        if self._cursor < len(self._candidates):
            self._cursor += 1
        self.gesture.clear()

    def undo(self) -> bool:
        if self._cursor == 0:
            return False
        self._cursor -= 1
        self.gesture.clear()
        return True

    def reset(self, candidates: Sequence[T]) -> None:
        """替换候选列表，游标回到 0。"""
        self._candidates = list(candidates)
        self._cursor = 0
        self.gesture.clear()
        self.last_exit_x = 0.0

    # ---------- 手势三阶段 ----------

    def begin_gesture(self) -> None:
        self.gesture.clear()
        self.gesture.active = True

    def update_gesture(self, delta_x: float) -> None:
        self.gesture.active = True
        self.gesture.delta_x = float(delta_x)

    def end_gesture(self) -> Decision | None:
        """
        松手：位移越过阈值则按方向提交并返回 Decision；否则回弹到中立位置，返回 None。
        """
        direction = classify(self.gesture.delta_x, self.threshold)
        if direction is None:
            self.gesture.clear()
            return None
        return self.commit(direction, displacement=exit_offset(direction))

    def press(self, direction: Direction) -> Decision:
        """按钮触发的决定：跳过手势阶段，直接以满幅位移提交。"""
        return self.commit(direction, displacement=exit_offset(direction))

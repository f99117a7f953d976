"""
滑卡决策：候选队列、手势判定、决定事件。与职位领域无关，可复用于任何逐张审阅的场景。
"""
from .gesture import Direction, GestureState, classify, exit_offset, EXIT_OFFSET
from .queue import (
    Decision,
    DecisionQueue,
    DecisionSink,
    EmptyQueueError,
    SwipeError,
    candidate_id,
)

__all__ = [
    "Direction",
    "GestureState",
    "classify",
    "exit_offset",
    "EXIT_OFFSET",
    "Decision",
    "DecisionQueue",
    "DecisionSink",
    "EmptyQueueError",
    "SwipeError",
    "candidate_id",
]

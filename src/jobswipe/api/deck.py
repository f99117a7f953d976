"""
人才端滑卡牌堆：每个人才会话持有一个 DecisionQueue，服务端负责游标、手势判定与提交，
前端只渲染当前卡与下一张预览，并转发拖拽位移或按钮操作。

决定的 sink 复用 swipes.record_decision；sink 写入失败时游标照常前进，
失败信息放在响应的 error 字段中返回（不回退、不重试）。
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Any

from jobswipe.core.config import swipe_threshold
from jobswipe.jobs.filters import filter_jobs
from jobswipe.jobs.schemas import Job, JobFilters
from jobswipe.jobs.sources.registry import get_job_source
from jobswipe.jobs.sources.store import StoreJobSource
from jobswipe.swipe import Decision, DecisionQueue, Direction

from .auth import api_error
from .store import StoreError, get_store
from .swipes import record_decision

logger = logging.getLogger(__name__)


def _make_sink(talent_id: str, persist: bool):
    def _sink(decision: Decision) -> None:
        if not persist:
            logger.info("decision (not persisted) talent=%s %s", talent_id, decision)
            return
        record_decision(get_store(), talent_id, decision.candidate_id, decision.direction.swipe)

    return _sink


class DeckRegistry:
    """user_id -> DecisionQueue；lock 串行化同一进程内对牌堆的所有操作。"""

    def __init__(self):
        self.lock = Lock()
        self._decks: dict[str, DecisionQueue[Job]] = {}

    def get(self, user_id: str) -> DecisionQueue[Job] | None:
        return self._decks.get(user_id)

    def put(self, user_id: str, queue: DecisionQueue[Job]) -> None:
        self._decks[user_id] = queue

    def drop(self, user_id: str) -> None:
        self._decks.pop(user_id, None)


_registry = DeckRegistry()


def get_registry() -> DeckRegistry:
    return _registry


def reset_registry() -> DeckRegistry:
    global _registry
    _registry = DeckRegistry()
    return _registry


def load_candidates(talent_id: str, filters: JobFilters, source_id: str | None = None) -> tuple[list[Job], bool]:
    """
    拉取在架职位、按筛选条件过滤并排除已滑过的职位。
    返回 (候选列表, 决定是否写入存储)；非存储职位源（mock）不落库。
    """
    source = get_job_source(source_id)
    persist = isinstance(source, StoreJobSource)
    swiped = get_store().swiped_job_ids(talent_id) if persist else set()
    return filter_jobs(source.fetch_jobs(), filters, exclude_ids=swiped), persist


def deck_view(queue: DecisionQueue[Job]) -> dict[str, Any]:
    current = queue.current()
    nxt = queue.peek_next()
    return {
        "current": current.model_dump(mode="json") if current else None,
        "next": nxt.model_dump(mode="json") if nxt else None,
        "position": min(queue.cursor + 1, len(queue)),
        "total": len(queue),
        "exhausted": queue.exhausted,
        "can_undo": queue.cursor > 0,
        "gesture": queue.gesture.to_dict(),
        "threshold": queue.threshold,
        "last_exit_x": queue.last_exit_x,
    }


def _require_deck(user_id: str) -> DecisionQueue[Job]:
    queue = get_registry().get(user_id)
    if queue is None:
        raise api_error(404, "deck_not_found", "no deck for this session, POST /v1/talent/deck first")
    return queue


def reset_deck(talent_id: str, filters: JobFilters) -> dict[str, Any]:
    """按筛选条件（重新）建牌堆；已有牌堆时整体替换列表，游标回到 0。"""
    candidates, persist = load_candidates(talent_id, filters)
    registry = get_registry()
    with registry.lock:
        queue = registry.get(talent_id)
        if queue is None:
            queue = DecisionQueue(candidates, sink=_make_sink(talent_id, persist), threshold=swipe_threshold())
            registry.put(talent_id, queue)
        else:
            queue.reset(candidates)
        logger.info("deck reset talent=%s candidates=%d", talent_id, len(candidates))
        return deck_view(queue)


def get_deck(talent_id: str) -> dict[str, Any]:
    registry = get_registry()
    with registry.lock:
        return deck_view(_require_deck(talent_id))


def _commit(queue: DecisionQueue[Job], action) -> dict[str, Any]:
    """执行一次会提交的动作；sink 失败时游标已前进，错误随响应返回。"""
    error = None
    decision: Decision | None = None
    try:
        decision = action()
    except StoreError as e:
        logger.warning("decision sink failed: %s", e)
        error = f"failed to save swipe: {e}"
    return {
        "decision": decision.to_dict() if decision else None,
        "deck": deck_view(queue),
        "error": error,
    }


def _ensure_current(queue: DecisionQueue[Job]) -> None:
    if queue.current() is None:
        raise api_error(409, "deck_exhausted", "no more jobs in this deck")


def commit_deck(talent_id: str, direction: str) -> dict[str, Any]:
    """按钮决定：apply / right 为投递，pass / left 为跳过。"""
    d = Direction.from_swipe(direction)
    registry = get_registry()
    with registry.lock:
        queue = _require_deck(talent_id)
        _ensure_current(queue)
        return _commit(queue, lambda: queue.press(d))


def gesture_deck(talent_id: str, phase: str, delta_x: float | None = None) -> dict[str, Any]:
    """拖拽三阶段：begin 清空、update 记录位移、end 判定是否提交。"""
    registry = get_registry()
    with registry.lock:
        queue = _require_deck(talent_id)
        # 牌堆已空时三个阶段都返回 409：调用方应先看 current 再开始拖拽
        _ensure_current(queue)
        if phase == "begin":
            queue.begin_gesture()
        elif phase == "update":
            if delta_x is None:
                raise api_error(400, "invalid_request", "delta_x is required for update")
            queue.update_gesture(delta_x)
        else:
            return _commit(queue, queue.end_gesture)
        return {"decision": None, "deck": deck_view(queue), "error": None}


def undo_deck(talent_id: str) -> dict[str, Any]:
    """回看上一张：只移动游标，已写入的滑动记录不撤回。"""
    registry = get_registry()
    with registry.lock:
        queue = _require_deck(talent_id)
        moved = queue.undo()
        return {"moved": moved, "deck": deck_view(queue)}


def drop_deck(user_id: str) -> None:
    """会话结束时丢弃该用户的牌堆；没有牌堆时什么也不做。"""
    registry = get_registry()
    with registry.lock:
        registry.drop(user_id)

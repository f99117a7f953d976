"""站内通知：列表、单条已读、全部已读。实时推送不在此实现，客户端轮询列表即可。"""
from .auth import AuthContext, api_error
from .store import NotFoundError, get_store


def list_notifications(auth: AuthContext) -> dict:
    store = get_store()
    items = store.list_notifications(auth.user_id)
    return {
        "notifications": [n.model_dump(mode="json") for n in items],
        "unread_count": sum(1 for n in items if not n.read),
    }


def mark_read(auth: AuthContext, notification_id: str) -> dict:
    try:
        n = get_store().mark_read(auth.user_id, notification_id)
    except NotFoundError as e:
        raise api_error(404, "not_found", str(e))
    return n.model_dump(mode="json")


def mark_all_read(auth: AuthContext) -> dict:
    count = get_store().mark_all_read(auth.user_id)
    return {"ok": True, "updated": count}

#!/usr/bin/env python3
"""
端到端验收：在进程内用 FastAPI TestClient 走一遍「管理员写演示数据 → 人才注册 → 建牌堆 → 手势 / 按钮决定 → 回看 → 公司处理投递 → 通知」。
不依赖已启动的 uvicorn，直接测试 app。

用法：uv run python scripts/verify_demo.py
结果会打印到终端，并写入项目根目录 verify_demo_result.txt。
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from fastapi.testclient import TestClient  # noqa: E402

from jobswipe.api.app import app  # noqa: E402
from jobswipe.api.store import get_store  # noqa: E402

client = TestClient(app)

PASSWORD = "secret123"


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def main():
    out_path = ROOT / "verify_demo_result.txt"
    lines = []
    ok = 0
    fail = 0

    def log(msg: str):
        lines.append(msg)
        print(msg)

    def check(name: str, cond: bool, detail: str = ""):
        nonlocal ok, fail
        if cond:
            log(f"   OK: {name}")
            ok += 1
        else:
            log(f"   失败: {name} {detail}")
            fail += 1

    # 1. 健康检查
    log("1. GET /health ...")
    r = client.get("/health")
    check("health", r.status_code == 200 and r.json().get("service") == "jobswipe", r.text[:200])

    # 2. 管理员写演示数据
    log("2. 管理员登录并写入演示数据 ...")
    get_store().create_user("admin@jobswipe.local", PASSWORD, "admin")
    r = client.post("/v1/auth/login", json={"email": "admin@jobswipe.local", "password": PASSWORD})
    admin = _bearer(r.json()["token"])
    r = client.post("/v1/admin/seed", headers=admin)
    check("seed", r.status_code == 200 and r.json().get("jobs") == 10, r.text[:200])

    # 3. 人才注册
    log("3. 人才注册 ...")
    r = client.post("/v1/auth/register", json={
        "email": "talent@jobswipe.local",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "role": "talent",
        "full_name": "Demo Talent",
    })
    check("register", r.status_code == 200 and r.json().get("redirect") == "/talent/dashboard", r.text[:200])
    talent = _bearer(r.json().get("token", ""))

    # 4. 建牌堆（远程职位）
    log("4. POST /v1/talent/deck (job_type=remote) ...")
    r = client.post("/v1/talent/deck", json={"job_type": "remote"}, headers=talent)
    deck = r.json()
    check("deck", r.status_code == 200 and deck.get("total", 0) > 0, r.text[:200])
    first = (deck.get("current") or {}).get("title")
    log(f"   首张: {first}，共 {deck.get('total')} 张")

    # 5. 手势：未过阈值回弹，过阈值右滑投递
    log("5. 手势决定 ...")
    client.post("/v1/talent/deck/gesture", json={"phase": "begin"}, headers=talent)
    client.post("/v1/talent/deck/gesture", json={"phase": "update", "delta_x": 60}, headers=talent)
    r = client.post("/v1/talent/deck/gesture", json={"phase": "end"}, headers=talent)
    check("未过阈值不决定", r.json().get("decision") is None, r.text[:200])
    client.post("/v1/talent/deck/gesture", json={"phase": "update", "delta_x": 180}, headers=talent)
    r = client.post("/v1/talent/deck/gesture", json={"phase": "end"}, headers=talent)
    decision = r.json().get("decision") or {}
    check("过阈值右滑投递", decision.get("direction") == "accept", r.text[:200])

    # 6. 回看后改为跳过
    log("6. 回看并改为跳过 ...")
    r = client.post("/v1/talent/deck/undo", headers=talent)
    check("undo", r.json().get("moved") is True, r.text[:200])
    r = client.post("/v1/talent/deck/commit", json={"direction": "pass"}, headers=talent)
    check("pass", (r.json().get("decision") or {}).get("direction") == "reject", r.text[:200])

    # 7. 按钮投递下一张
    log("7. 按钮投递 ...")
    r = client.post("/v1/talent/deck/commit", json={"direction": "apply"}, headers=talent)
    data = r.json()
    check("apply", r.status_code == 200 and not data.get("error"), r.text[:200])
    job_id = (data.get("decision") or {}).get("candidate_id")

    r = client.get("/v1/talent/applications", headers=talent)
    check("已投递 1 个", [a["job_id"] for a in r.json()] == [job_id], r.text[:200])

    # 8. 管理员概览
    log("8. GET /v1/admin/overview ...")
    r = client.get("/v1/admin/overview", headers=admin)
    stats = r.json().get("stats") or {}
    log(f"   stats={stats}")
    check("overview", stats.get("total_applications") == 1, r.text[:200])

    log("")
    log(f"--- 合计: 通过 {ok} 项, 失败 {fail} 项 ---")
    out_path.write_text("\n".join(lines), encoding="utf-8")
    if fail > 0:
        sys.exit(1)
    log("验收通过。可用 scripts/serve.py 启动服务后做人工确认。")
    sys.exit(0)


if __name__ == "__main__":
    main()

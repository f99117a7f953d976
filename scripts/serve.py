#!/usr/bin/env python3
"""
启动 JobSwipe API，并在同一进程的内置存储里预先创建管理员账号（可选写入演示数据）。

内置存储只存在于进程内存中，管理员必须与服务同进程创建，因此不提供单独的「建管理员」脚本。

用法:
  uv run python scripts/serve.py --admin-email admin@example.com --admin-password secret123 [--seed]
  --admin-email / --admin-password  管理员账号；也可用环境变量 JOBSWIPE_ADMIN_EMAIL / JOBSWIPE_ADMIN_PASSWORD
  --seed                            启动前写入 5 家演示公司与 10 个职位
  --host / --port                   监听地址，默认 127.0.0.1:8000
"""
import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

import uvicorn  # noqa: E402

from jobswipe.api.app import app  # noqa: E402
from jobswipe.api.store import ConflictError, get_store  # noqa: E402
from jobswipe.core import min_password_length, setup_logging  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="启动 JobSwipe API 并创建管理员")
    parser.add_argument("--admin-email", default=os.getenv("JOBSWIPE_ADMIN_EMAIL"))
    parser.add_argument("--admin-password", default=os.getenv("JOBSWIPE_ADMIN_PASSWORD"))
    parser.add_argument("--seed", action="store_true", help="写入演示数据")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    setup_logging()
    store = get_store()

    if args.admin_email:
        if not args.admin_password or len(args.admin_password) < min_password_length():
            print(f"[ERROR] 管理员密码至少 {min_password_length()} 位")
            return 1
        try:
            user = store.create_user(args.admin_email, args.admin_password, "admin")
        except ConflictError as e:
            print(f"[ERROR] {e}")
            return 1
        print(f"[OK] 管理员已创建: {user.email} (id={user.id})")
    else:
        print("[WARN] 未指定 --admin-email，本次启动没有管理员账号")

    if args.seed:
        n_companies, n_jobs = store.seed()
        print(f"[OK] 演示数据: {n_companies} 家公司, {n_jobs} 个职位")

    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())

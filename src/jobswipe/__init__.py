"""
JobSwipe：人才左右滑动浏览职位（投递 / 跳过），公司发布职位并处理投递，管理员查看全站概览。
"""

__version__ = "0.1.0"

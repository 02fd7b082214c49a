"""
API路由
"""

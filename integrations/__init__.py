"""
第三方集成
"""

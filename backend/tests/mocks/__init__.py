"""测试用 Mock 工具"""

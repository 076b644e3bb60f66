"""
Report-It: municipal issue reporting service
"""

"""Employee attendance tracking service"""

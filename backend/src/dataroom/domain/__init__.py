"""Data room domain layer - pure logic and ports, no framework imports"""

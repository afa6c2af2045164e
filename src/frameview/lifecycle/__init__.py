"""Task tracking and server lifecycle"""

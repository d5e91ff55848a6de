"""Use-case / operations layer.

Actions invoked by the UI around the workflow that touch the filesystem
(picking and saving images).
"""

"""
Range slicing of mdast trees.

The pipeline is: length oracle -> boundary resolver -> tree rebuilder ->
post-processing. `slicer` is the only module callers need.
"""

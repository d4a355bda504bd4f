"""larvtx command line interface.

Usage Examples
--------------
Run the vertex selection on a set of files::

    larvtx --config config/vertex_selection.yaml --source events.h5 --output selected.csv

Override a configuration parameter from the command line::

    larvtx -c config/vertex_selection.yaml --set algo.vertex_selection.max_top_score_candidates=3
"""

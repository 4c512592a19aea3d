"""
BOM Domain - Bill of Materials.

This domain handles the hierarchical structure of products:
- BOMTreeNode is the canonical tree used for storage and planning
- BOMGraph is the editable node/edge form drawn in the editor
- Validation guards the graph before it becomes a tree
- Expansion lays a saved tree back out as fresh graph nodes
"""

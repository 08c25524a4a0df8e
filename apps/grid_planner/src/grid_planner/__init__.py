"""grid_planner - evaluate futures grid plans from YAML with the gridcalc calculator."""

"""HTTP API for the award payroll engine."""

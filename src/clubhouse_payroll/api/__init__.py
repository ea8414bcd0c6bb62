"""HTTP API for payroll reports and position credits."""

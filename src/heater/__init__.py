"""Price-aware heater controller: set point decisions over a day-ahead price cache."""

"""Utilities shared across the package.

- `logger`: package logger
- `factory`: instantiate classes from configuration blocks
- `stopwatch`: wall/CPU time measurements of each processing step
- `globals`: particle masses, PDG codes and histogram binnings
- `kinematics`: momentum, rapidity and TOF velocity helpers
- `enums`: enumerated particle species used by the PID-based tasks
"""

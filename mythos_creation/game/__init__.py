"""Rules engine: dice, attribute generation, age effects, derived stats, formulas, skills and step validation."""

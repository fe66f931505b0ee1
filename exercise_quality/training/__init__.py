"""
Training Doctrine (FINAL / FROZEN)

This project supports exactly ONE training paradigm.

------------------------------------------------------------
Batch Training on a Closed Dataset
------------------------------------------------------------

Definition:
- TrainingUnit = one run over the two cached csv files
- Model        = Batch (fit on a finite, fully materialized dataset)
- Validation   = stratified hold-out + k-fold CV inside the train partition

Semantics:
- One run builds every entity once (schema, partition, model, metrics)
  and discards them at process end.
- Column roles are decided once, from training data only, and are
  applied verbatim to the test data by exact name.
- Every source of randomness takes the configured seed explicitly.
  Same inputs + same seed => same partition, same model, same predictions.

Non-goals:
- Online / incremental updates
- Serving predictions
- Persisting models
"""

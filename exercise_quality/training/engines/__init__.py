"""
Training Engines (FINAL / FROZEN)

This directory contains the engines of the batch training run.

IMPORTANT:
- Each engine defines COMPLETE semantics of ONE pipeline stage.
- Engines never read or write TrainingContext; steps do.
- Engines take every random seed as an explicit argument.


Stage order
-----------

DatasetLoadEngine      fetch (or reuse cached) csv, parse missing tokens
FeatureCleanEngine     missingness -> identifier prefix -> near-zero variance
SchemaAlignEngine      test columns ∩ cleaned training features
PartitionEngine        stratified train / validation split
RandomForestTrainEngine  k-fold CV + refit on the train partition
ModelEvaluateEngine    confusion matrix, accuracy, importance
PredictEngine          one label per test row
ReportEngine           charts + markdown summary
PredictionWriteEngine  optional per-row text files


Safety Rule (HARD):
-------------------

Engines MUST raise instead of degrading:
- no default-filled feature columns
- no silently skipped rows
- no predictions from a model that failed validation
"""

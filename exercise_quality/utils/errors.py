# exercise_quality/utils/errors.py
class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided config (paths, run ids, etc).
    Should NOT print traceback.
    """


class PipelineError(RuntimeError):
    """
    Base of every fatal pipeline failure.
    A run that raises one of these produced no usable result.
    """


class DatasetFetchError(PipelineError):
    """
    I/O failure: download failed, cache unreadable, CSV malformed.
    """


class SchemaMismatchError(PipelineError):
    """
    Column contract broken between training schema and the data handed in.
    """


class DegenerateDataError(PipelineError):
    """
    Data cannot support the statistics asked of it
    (class too small to stratify / cross-validate, constant predictor, empty set).
    """

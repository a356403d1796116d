"""Base analyzer class for all analysis components in the toolbox."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Abstract base class for data analysis components.

    All analyzers must:
    1. Accept a DatasetView in their constructor
    2. Implement fit() to perform the analysis and return self for chaining
    3. Implement result() to return a frozen dataclass with results

    The result() method must return a frozen @dataclass with all analysis outputs.
    Analyzers never mutate the dataset they were built from; steps that change
    the table (e.g. appending cluster labels) go through the dataset object.


    ---


    ### Adding a New Analyzer

    **1. Create analyzer class** (in `analysis/my_analyzer.py`):

    ```python
    from dataclasses import dataclass
    from mtcars_eda.data.views import DatasetView

    @dataclass(frozen=True)
    class MyAnalysisResult:
        '''Results package for MyAnalyzer.'''
        summary: pd.DataFrame

    class MyAnalyzer(BaseAnalyser):
        '''Pure computation analyzer (no plotting!).'''

        def __init__(self, view: DatasetView):
            self._view = view
            self._summary: pd.DataFrame | None = None

        def fit(self) -> "MyAnalyzer":
            self._summary = ...
            return self

        def result(self) -> MyAnalysisResult:
            if self._summary is None:
                raise ValueError("Call fit() first")
            return MyAnalysisResult(summary=self._summary)
    ```

    **2. Add factory method** to `BaseDataset`:

    ```python
    def make_my_analyzer(self, *, columns: Iterable[str] | None = None) -> MyAnalyzer:
        from mtcars_eda.analysis.my_analyzer import MyAnalyzer
        return MyAnalyzer(self.analyzer_view(columns=columns))
    ```

    ### Adding Visualization Functions

    Plot helpers live in `plotting/`, accept `*Result` dataclasses (so pretty
    names are available), return `Figure` objects and forward `**kwargs` to the
    underlying seaborn/matplotlib call.
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Fit the analyzer to the data.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return analysis results as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...

# core/batch_processor.py

import multiprocessing as mp
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor
from typing import Callable, List, Sequence, Any
from tqdm import tqdm

class BatchProcessor:
    """
    Parallel map over candidate records for large collections
    """

    def __init__(self,
                 n_workers: int = None,
                 chunk_size: int = 64,
                 show_progress: bool = False):
        self.n_workers = n_workers or mp.cpu_count()
        self.chunk_size = chunk_size
        self.show_progress = show_progress

    def map(self,
            func: Callable,
            items: Sequence[Any],
            use_threading: bool = False) -> List[Any]:
        """
        Apply func to every item in parallel, preserving input order

        Args:
            func: Picklable callable applied to each item
            items: Items to process
            use_threading: Use threading instead of multiprocessing

        Returns:
            Results in the same order as items
        """
        if not items:
            return []

        if self.n_workers <= 1:
            return [func(item) for item in tqdm(items, desc="Scoring images",
                                                disable=not self.show_progress)]

        executor_class = ThreadPoolExecutor if use_threading else ProcessPoolExecutor
        # chunksize only applies to process pools
        map_kwargs = {} if use_threading else {'chunksize': self.chunk_size}

        with executor_class(max_workers=self.n_workers) as executor:
            results = list(tqdm(
                executor.map(func, items, **map_kwargs),
                total=len(items),
                desc="Scoring images",
                disable=not self.show_progress
            ))

        return results

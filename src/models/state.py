"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field

from .content import Post


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the publishing pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, postGlob, maxRelated,
          includeDrafts, wrapLists
        - env_check: envOK
        - posts_load: posts
        - posts_render: renderedPosts
        - related_compute: relatedPosts
        - results_write: writeResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory holding the markdown posts (the content store)
        outputdir: Directory for rendered fragments and related.json
        verbosity: Logging verbosity level (1-3)
        postGlob: Glob selecting post files inside inputdir
        maxRelated: Number of related posts kept per post
        includeDrafts: Also process unpublished posts
        wrapLists: Wrap list item runs in <ul>/<ol>
        envOK: Environment validation passed
        posts: Posts loaded from the store, newest first
        renderedPosts: slug -> rendered HTML fragment
        relatedPosts: slug -> ordered related slugs
        writeResult: Write summary (output_dir, fragment_count, related_file)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    postGlob: Optional[str] = field(default=None)
    maxRelated: Optional[int] = field(default=None)
    includeDrafts: bool = field(default=False)
    wrapLists: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    posts: Optional[List[Post]] = field(default=None)
    renderedPosts: Optional[Dict[str, str]] = field(default=None)
    relatedPosts: Optional[Dict[str, List[str]]] = field(default=None)
    writeResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing the posts
            outputdir: Directory for output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Unknown CLI options (e.g. ones added by chris_plugin) are dropped
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            posts_load,
            posts_render,
            related_compute,
            results_write,
            results_report
        )

    This is equivalent to nesting the calls inside-out, but reads
    left-to-right.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)

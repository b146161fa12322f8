"""
Main workflow orchestrator for excel-batch-executor
"""

from pathlib import Path
from typing import Optional, Union

from executor import ExcelProcessExecutor
from hooks import HookSet, load_hooks
from spreadsheet_engine import create_application

from config import (
    RECURSIVE,
    SAVE_ON_SUCCESS,
    get_relative_path,
)


class BatchWorkflow:
    """Run the hooks over one folder and report the result"""

    def __init__(
        self,
        hooks: Optional[HookSet] = None,
        engine: Optional[str] = None,
        save_on_success: bool = SAVE_ON_SUCCESS,
        recursive: bool = RECURSIVE,
        visible: Optional[bool] = None,
        application=None,
    ):
        """Initialize workflow

        Args:
            hooks: Processing hooks (all no-ops if None)
            engine: Spreadsheet engine name ('com' or 'openpyxl')
            save_on_success: Save workbooks that were processed without error
            recursive: Visit subfolders
            visible: Show the Excel window (COM engine only)
            application: Already started spreadsheet application
        """
        self.hooks = hooks or HookSet()
        self.engine = engine
        self.save_on_success = save_on_success
        self.recursive = recursive
        self.visible = visible
        self.application = application

        # Statistics
        self.stats = {
            "files_processed": 0,
            "succeeded": 0,
            "failed": 0,
            "cancelled": False,
            "errors": "",
        }

    def _build_executor(self) -> ExcelProcessExecutor:
        if self.application is None:
            self.application = create_application(self.engine, visible=self.visible)
        return ExcelProcessExecutor(
            self.hooks.pre_process_sheet,
            self.hooks.process_sheet,
            self.hooks.post_process_sheet,
            self.save_on_success,
            recursive=self.recursive,
            application=self.application,
            verbose=True,
        )

    def run(self, input_dir: Union[str, Path, None] = None) -> dict:
        """Run the batch

        Args:
            input_dir: Folder to process; the folder picker is shown if None

        Returns:
            Dictionary with workflow statistics
        """
        print(f"\n{'='*80}")
        print("Excel Batch Executor Starting")
        print(f"{'='*80}")
        if input_dir is not None:
            print(f"Input directory: {get_relative_path(Path(input_dir).resolve())}")
        else:
            print("Input directory: (select in dialog)")
        print(f"Recursive: {self.recursive}")
        print(f"Save on success: {self.save_on_success}")
        print()

        executor = self._build_executor()
        try:
            if input_dir is None:
                executor.run_interactive()
            else:
                executor.run_on_folder(input_dir)
        finally:
            executor.quit()
            self.application = None

        self.stats["files_processed"] = executor.processed_count
        self.stats["succeeded"] = executor.success_count
        self.stats["failed"] = executor.error_count
        self.stats["cancelled"] = executor.cancelled
        self.stats["errors"] = executor.error_message

        # Print summary
        print(f"\n{'='*80}")
        print("Batch Summary")
        print(f"{'='*80}")
        if executor.cancelled:
            print(f"⚠ {executor.error_message}")
            return self.stats
        print(f"Files processed: {self.stats['files_processed']}")
        print(f"Succeeded: {self.stats['succeeded']}")
        print(f"Failed: {self.stats['failed']}")
        if executor.error_log:
            print("\nErrors:")
            print(executor.error_message)

        return self.stats


def main_workflow(
    input_dir: Optional[str] = None,
    hooks_module: Optional[str] = None,
    engine: Optional[str] = None,
    save_on_success: bool = SAVE_ON_SUCCESS,
    recursive: bool = RECURSIVE,
    visible: Optional[bool] = None,
) -> dict:
    """Convenience function to run workflow with parameters

    Args:
        input_dir: Folder to process (folder picker if None)
        hooks_module: Importable module defining the processing hooks
        engine: Spreadsheet engine name
        save_on_success: Save workbooks processed without error
        recursive: Visit subfolders
        visible: Show the Excel window (COM engine only)

    Returns:
        Dictionary with workflow statistics
    """
    hooks = load_hooks(hooks_module) if hooks_module else None
    workflow = BatchWorkflow(
        hooks=hooks,
        engine=engine,
        save_on_success=save_on_success,
        recursive=recursive,
        visible=visible,
    )
    return workflow.run(input_dir)

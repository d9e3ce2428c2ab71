"""命令行界面模块

使用 Rich 库提供美化的命令行体验
"""

import argparse
import asyncio
import logging
import platform
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.table import Table
from rich.text import Text

from . import __version__
from .catalog import find_version, select_release
from .client import OptifineDL
from .config import build_config, get_config
from .exceptions import OptifineDlException
from .models import Config, DownloadProgress, ReleaseStub, VersionEntry
from .utils.filename_utils import build_destination


PACKAGE_LOGGER = "optifine_dl"

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """为包日志安装 RichHandler"""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=verbose,
        )
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def opener_command(path: Path, system: Optional[str] = None) -> List[str]:
    """用系统默认程序打开文件的命令"""
    system = system or platform.system()
    if system == "Windows":
        return ["cmd", "/C", "start", "", str(path)]
    if system == "Darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


class RichProgressHandler:
    """Rich进度处理器"""

    def __init__(self, console: Console):
        self.console = console
        self.progress: Optional[Progress] = None
        self.task_id = None
        self.filename = ""

    def start_progress(self, filename: str, total: int = 0):
        """开始进度显示"""
        self.filename = filename
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            "[progress.percentage]{task.percentage:>3.1f}%",
            "•",
            DownloadColumn(),
            "•",
            TransferSpeedColumn(),
            "•",
            TimeRemainingColumn(),
            console=self.console,
            refresh_per_second=4,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(filename, total=total or None)

    def update_progress(self, progress_info: DownloadProgress):
        """更新进度"""
        if self.progress and self.task_id is not None:
            description = progress_info.filename
            if progress_info.is_complete:
                description = f"✅ {description}"
            self.progress.update(
                self.task_id,
                description=description,
                completed=progress_info.downloaded,
                total=progress_info.total or None,
            )

    def callback(self, downloaded: int, total: int) -> None:
        """供 StreamDownloader 使用的进度回调"""
        self.update_progress(
            DownloadProgress(filename=self.filename, downloaded=downloaded, total=total)
        )

    def stop_progress(self):
        """停止进度显示"""
        if self.progress:
            self.progress.stop()
            self.progress = None
            self.task_id = None


class CLIApplication:
    """命令行应用程序"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.progress_handler = RichProgressHandler(self.console)

    def create_parser(self) -> argparse.ArgumentParser:
        """创建命令行参数解析器"""
        parser = argparse.ArgumentParser(
            prog="optifine-dl",
            description="OptiFine 下载器：选择 Minecraft 版本并下载对应的 OptiFine 安装包",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
使用示例:
  optifine-dl                    # 交互式选择版本并下载、打开安装包
  optifine-dl --list             # 只列出所有版本
  optifine-dl -d ~/Downloads --keep --no-launch
  OPTIFINE_DL_TIMEOUT=60 optifine-dl
            """,
        )

        parser.add_argument(
            "--list", action="store_true", help="列出所有版本及其发布数量后退出"
        )
        parser.add_argument(
            "-d", "--dir", default=None, help="下载目录 (默认: 系统临时目录)"
        )
        parser.add_argument(
            "--keep", action="store_true", help="完成后保留下载的文件"
        )
        parser.add_argument(
            "--no-launch", action="store_true", help="下载后不自动打开安装包"
        )
        parser.add_argument("-v", "--verbose", action="store_true", help="显示详细输出")

        # 常用配置参数
        parser.add_argument("--listing-url", help="下载列表页面URL")
        parser.add_argument("--base-url", help="用于补全相对链接的站点根地址")
        parser.add_argument("--timeout", type=int, help="请求超时时间(秒)，默认不限制")
        parser.add_argument("--user-agent", help="用户代理字符串")

        parser.add_argument(
            "--version", action="version", version=f"%(prog)s {__version__}"
        )

        return parser

    def build_config(self, args: argparse.Namespace) -> Config:
        """加载基础配置并用命令行参数覆盖"""
        config = get_config()
        return build_config(
            {
                "listing_url": args.listing_url,
                "base_endpoint": args.base_url,
                "timeout": args.timeout,
                "user_agent": args.user_agent,
                "debug_mode": True if args.verbose else None,
            },
            **config.model_dump(),
        )

    def print_banner(self):
        """打印应用横幅"""
        banner = Text("OPTIFINE-DL", style="bold red")
        banner.append(f" - OptiFine 下载器 v{__version__}", style="dim")

        self.console.print(Panel(banner, border_style="red", padding=(1, 2)))

    def print_catalog(self, catalog: List[VersionEntry]):
        """打印版本目录"""
        table = Table(title="Minecraft 版本", border_style="dim")
        table.add_column("版本", style="bold green")
        table.add_column("发布数量", justify="right", style="yellow")

        for entry in catalog:
            table.add_row(entry.identifier, str(entry.release_count))

        self.console.print(table)

    def print_available_downloads(self, entry: VersionEntry):
        """打印某个版本下可用的发布条目"""
        table = Table(
            title=f"{entry.identifier} 可用的 OptiFine 下载 ({entry.release_count})",
            border_style="dim",
        )
        table.add_column("序号", style="yellow", justify="right")
        table.add_column("文件名", style="bold blue")
        table.add_column("镜像地址", style="white")

        for idx, release in enumerate(entry.releases, start=1):
            table.add_row(str(idx), release.filename, release.mirror_url)

        self.console.print(table)

    def print_error(self, error: str):
        """打印错误信息"""
        error_text = Text(f"❌ 错误: {error}", style="bold red")
        self.console.print(Panel(error_text, border_style="red"))

    def print_traceback(self, config: Optional[Config]):
        """调试模式下打印当前异常的堆栈跟踪"""
        if config is not None and config.debug_mode:
            self.console.print_exception()

    def prompt_version(self, catalog: List[VersionEntry]) -> VersionEntry:
        """询问版本号，直到输入与目录中的某个版本完全匹配"""
        while True:
            choice = self.console.input(
                "请输入 Minecraft 版本 ([cyan]例如 1.16.5[/cyan]): "
            )
            self.console.print(f"正在查找版本 {escape(choice.strip())}...")

            entry = find_version(catalog, choice)
            if entry is not None:
                return entry

            self.console.print("[red]未找到该版本。[/red]")

    def prompt_release(self, entry: VersionEntry) -> ReleaseStub:
        """询问发布序号（从 1 开始），直到序号有效"""
        while True:
            choice = self.console.input("请输入要下载的发布序号: ")
            try:
                index = int(choice.strip())
            except ValueError:
                index = 0

            release = select_release(entry, index)
            if release is not None:
                return release

            self.console.print("[red]无效的发布序号。[/red]")

    def choose_release(self, catalog: List[VersionEntry]) -> ReleaseStub:
        """先选版本再选发布条目；没有发布条目的版本会重新询问"""
        while True:
            entry = self.prompt_version(catalog)
            if entry.releases:
                self.print_available_downloads(entry)
                return self.prompt_release(entry)

            self.console.print(f"[yellow]{entry.identifier} 没有可用的下载。[/yellow]")

    async def download_release(
        self, downloader: OptifineDL, release: ReleaseStub, destination: Path
    ) -> int:
        """下载发布条目，未完成（出错或被取消）时删除不完整的文件"""
        if destination.exists():
            destination.unlink()

        self.console.print(f"⬇️  正在下载 [bold blue]{release.filename}[/bold blue]...")
        self.progress_handler.start_progress(destination.name)
        completed = False
        try:
            written = await downloader.download(
                release, destination, self.progress_handler.callback
            )
            completed = True
            return written
        finally:
            self.progress_handler.stop_progress()
            if not completed and destination.exists():
                destination.unlink()

    async def launch(self, path: Path) -> bool:
        """用系统默认程序打开下载的文件"""
        command = opener_command(path)
        try:
            process = await asyncio.create_subprocess_exec(*command)
            returncode = await process.wait()
        except OSError as e:
            logger.warning("Failed to launch %s: %s", path, e)
            self.console.print(f"[yellow]无法自动打开文件，请手动运行: {path}[/yellow]")
            return False

        if returncode != 0:
            logger.warning(
                "Opener %s exited with status %d", command[0], returncode
            )
        return returncode == 0

    async def run(self, args: argparse.Namespace) -> int:
        """执行主流程"""
        config: Optional[Config] = None
        try:
            config = self.build_config(args)

            async with OptifineDL(config=config) as downloader:
                self.console.print(f"🔍 正在获取 [link]{config.listing_url}[/link]...")
                catalog = await downloader.load_catalog()
                self.console.print("[green]完成。[/green]")

                if args.list:
                    self.print_catalog(catalog)
                    return 0

                release = self.choose_release(catalog)

                directory = Path(args.dir) if args.dir else Path(tempfile.gettempdir())
                directory.mkdir(parents=True, exist_ok=True)
                destination = build_destination(
                    directory,
                    release.filename,
                    config.file_extension,
                    config.max_filename_length,
                )

                await self.download_release(downloader, release, destination)

            self.console.print(f"✅ 已保存: [link]{destination}[/link]")

            if not args.no_launch:
                await self.launch(destination)

            if not args.keep:
                self.console.input("完成安装后按 Enter 键退出。")
                if destination.exists():
                    destination.unlink()

        except OptifineDlException as e:
            self.print_error(str(e))
            self.print_traceback(config)
            return 1
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n🛑 用户取消")
            return 1
        except Exception as e:
            self.print_error(f"意外错误 ({type(e).__name__}): {e}")
            self.print_traceback(config)
            return 1

        return 0

    async def main(self, argv=None) -> int:
        """主入口函数"""
        parser = self.create_parser()
        args = parser.parse_args(argv)

        setup_logging(args.verbose)
        self.print_banner()

        return await self.run(args)


def main(argv=None) -> int:
    """CLI入口点 - 同步包装器"""
    app = CLIApplication()

    try:
        return asyncio.run(app.main(argv))
    except KeyboardInterrupt:
        print("\n🛑 程序被用户中断")
        return 1


if __name__ == "__main__":
    sys.exit(main())

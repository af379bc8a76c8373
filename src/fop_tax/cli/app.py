"""Main Typer application for FOP Tax Assistant."""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from fop_tax import __version__
from fop_tax.cli.console import (
    configure_logging,
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from fop_tax.config import get_settings
from fop_tax.core.calculators.limits import check_tax_limits
from fop_tax.core.calculators.quarters import quarter_display_name
from fop_tax.core.calculators.report_builder import (
    build_quarterly_calculation,
    build_tax_report,
)
from fop_tax.core.calculators.social import (
    apply_social_contributions,
    build_esv_report,
    update_month_settings,
    update_month_settings_from,
)
from fop_tax.core.models import AccumulatedData, Currency, FOPProfile, LimitCheck
from fop_tax.core.services import PaymentLedger, payment_from_entry
from fop_tax.core.validation import validate_esv_report, validate_profile, validate_report
from fop_tax.infrastructure.declarations import build_filing_package
from fop_tax.infrastructure.rates import NBURateClient
from fop_tax.infrastructure.storage import (
    AccumulatedDataRepository,
    ESVSettingsRepository,
    JsonFileStore,
    PaymentRepository,
    ProfileRepository,
    apply_imported_data,
    clear_all_data,
    export_all_data,
    get_storage_info,
    read_backup_file,
)
from fop_tax.shared.exceptions import DeclarationError, FopTaxError, ValidationError
from fop_tax.shared.formatters import (
    format_currency,
    format_file_size,
    format_percentage,
    format_rate,
)
from fop_tax.shared.money import to_decimal
from fop_tax.shared.validators import mask_tin

app = typer.Typer(
    name="fop-tax",
    help="Облік доходів і податкова звітність ФОП 3 групи",
    add_completion=True,
    no_args_is_help=True,
)
profile_app = typer.Typer(help="Профіль платника", no_args_is_help=True)
esv_app = typer.Typer(help="Налаштування та звіт ЄСВ", no_args_is_help=True)
backup_app = typer.Typer(help="Резервні копії та сховище", no_args_is_help=True)
app.add_typer(profile_app, name="profile")
app.add_typer(esv_app, name="esv")
app.add_typer(backup_app, name="backup")

# Resolved by the main callback on every invocation
state: dict = {"data_dir": None}

YearArg = Annotated[int, typer.Argument(help="Рік", min=2000, max=2100)]
QuarterArg = Annotated[int, typer.Argument(help="Квартал (1-4)", min=1, max=4)]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"FOP Tax Assistant v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    data_dir: Annotated[
        Optional[Path],
        typer.Option("--data-dir", help="Каталог з даними (типово з налаштувань)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Докладний журнал"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Показати версію та вийти",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """FOP Tax Assistant - облік доходів, єдиний податок і декларації ДПС."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    state["data_dir"] = data_dir or settings.data_dir


def _store() -> JsonFileStore:
    return JsonFileStore(state["data_dir"] or get_settings().data_dir)


def _ledger(store: JsonFileStore) -> PaymentLedger:
    return PaymentLedger(PaymentRepository(store), AccumulatedDataRepository(store))


def _require_profile(store: JsonFileStore) -> FOPProfile:
    profile = ProfileRepository(store).load()
    if profile is None:
        raise ValidationError(
            "Профіль ФОП не заповнено. Використайте: fop-tax profile load <файл>"
        )
    return profile


def _year_data(store: JsonFileStore, year: int) -> AccumulatedData:
    """Stored accumulated data with ЄСВ slots from the current schedule."""
    data = AccumulatedDataRepository(store).load(year)
    return apply_social_contributions(data, ESVSettingsRepository(store).load(year))


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Очікується дата у форматі РРРР-ММ-ДД: {value}")


def _parse_amount(value: str) -> Decimal:
    try:
        amount = to_decimal(value.replace(",", "."))
    except ValueError:
        raise typer.BadParameter(f"Некоректна сума: {value}")
    if amount < 0:
        raise typer.BadParameter("Сума не може бути від'ємною")
    return amount


def _print_limit(check: LimitCheck) -> None:
    style = "limit_ok"
    if check.limit_exceeded:
        style = "limit_exceeded"
    elif check.warning_message:
        style = "limit_warning"
    console.print(
        f"Використано ліміту: [{style}]{format_percentage(check.usage_percent)}[/{style}]"
    )
    if check.warning_message:
        print_warning(check.warning_message)


# === Payments ===


@app.command()
def add(
    payment_date: Annotated[str, typer.Argument(help="Дата платежу (РРРР-ММ-ДД)")],
    amount: Annotated[str, typer.Argument(help="Сума у валюті платежу")],
    currency: Annotated[
        Currency,
        typer.Option("--currency", "-c", help="Валюта платежу", case_sensitive=False),
    ] = Currency.UAH,
    rate: Annotated[
        Optional[str],
        typer.Option("--rate", "-r", help="Курс НБУ (якщо не вказано, буде завантажено)"),
    ] = None,
    counterparty: Annotated[
        str, typer.Option("--counterparty", help="Платник")
    ] = "",
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="Призначення платежу")
    ] = None,
) -> None:
    """Додає вхідний платіж і перераховує накопичувальні дані."""
    on = _parse_date(payment_date)
    value = _parse_amount(amount)
    explicit_rate = _parse_amount(rate) if rate else None

    try:
        settings = get_settings()
        store = _store()

        if currency != Currency.UAH and explicit_rate is None:
            with NBURateClient(settings.nbu_api_url, settings.request_timeout) as client:
                payment = payment_from_entry(
                    on,
                    value,
                    currency,
                    rate_source=client,
                    counterparty=counterparty,
                    description=description,
                )
        else:
            payment = payment_from_entry(
                on,
                value,
                currency,
                rate=explicit_rate,
                counterparty=counterparty,
                description=description,
            )

        _ledger(store).add(payment)

        if payment.is_foreign and payment.exchange_rate is None:
            print_warning("Курс не знайдено, сума збережена без конвертації")

        print_success(
            f"Платіж додано: {payment.id} "
            f"({format_currency(payment.amount_local)})"
        )

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def payments(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="Лише платежі за рік")
    ] = None,
) -> None:
    """Показує збережені платежі."""
    items = _ledger(_store()).list_payments(year)

    if not items:
        print_info("Платежів немає")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Дата")
    table.add_column("Сума", justify="right")
    table.add_column("Курс", justify="right")
    table.add_column("У гривнях", justify="right", style="currency")
    table.add_column("Платник", overflow="fold")

    total = Decimal("0")
    for p in items:
        table.add_row(
            p.id[:8],
            p.date.strftime("%d.%m.%Y"),
            format_currency(p.amount, p.currency_code.value),
            str(p.exchange_rate) if p.exchange_rate else "-",
            format_currency(p.amount_local),
            p.counterparty or "-",
        )
        total += p.amount_local

    console.print(table)
    console.print(f"[header]Разом:[/header] [value]{format_currency(total)}[/value]")


@app.command()
def delete(
    payment_id: Annotated[str, typer.Argument(help="ID платежу (або його початок)")],
) -> None:
    """Видаляє платіж і перераховує накопичувальні дані."""
    try:
        ledger = _ledger(_store())
        matches = [p for p in ledger.list_payments() if p.id.startswith(payment_id)]

        if not matches:
            print_error(f"Платіж {payment_id} не знайдено")
            raise typer.Exit(1)
        if len(matches) > 1:
            print_error(f"Префікс {payment_id} відповідає кільком платежам")
            raise typer.Exit(1)

        ledger.delete(matches[0].id)
        print_success(f"Платіж {matches[0].id} видалено")

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def rate(
    currency: Annotated[Currency, typer.Argument(help="Валюта", case_sensitive=False)],
    on: Annotated[str, typer.Argument(help="Дата (РРРР-ММ-ДД)")],
) -> None:
    """Показує офіційний курс НБУ на дату."""
    day = _parse_date(on)
    settings = get_settings()

    with NBURateClient(settings.nbu_api_url, settings.request_timeout) as client:
        value = client.fetch_rate(currency, day)

    if value is None:
        print_error(f"Курс {currency.value} на {day.strftime('%d.%m.%Y')} не знайдено")
        raise typer.Exit(1)

    console.print(f"{currency.value} {day.strftime('%d.%m.%Y')}: [value]{value}[/value] грн")


# === Calculations and filings ===


@app.command()
def summary(year: YearArg, quarter: QuarterArg) -> None:
    """Показує розрахунок податків за квартал."""
    try:
        store = _store()
        profile = ProfileRepository(store).load() or FOPProfile()
        calc = build_quarterly_calculation(profile, _year_data(store, year), quarter)

        console.print()
        console.print(
            Panel.fit(
                f"[header]Період:[/header] {quarter_display_name(year, quarter)}\n"
                f"[header]ФОП:[/header] {profile.full_name or '-'}\n"
                f"[header]РНОКПП:[/header] {mask_tin(profile.tin)}",
                title="Розрахунок єдиного податку",
                border_style="blue",
            )
        )

        table = Table(show_header=True, header_style="bold")
        table.add_column("Показник")
        table.add_column("За квартал", justify="right")
        table.add_column("З початку року", justify="right")
        table.add_row(
            "Дохід у гривнях",
            format_currency(calc.quarterly_income_local),
            format_currency(calc.cumulative_income_local),
        )
        table.add_row(
            "Дохід у валюті",
            format_currency(calc.quarterly_income_foreign),
            format_currency(calc.cumulative_income_foreign),
        )
        table.add_row(
            "[bold]Загальний дохід[/bold]",
            format_currency(calc.quarterly_income),
            format_currency(calc.cumulative_income),
        )
        table.add_row(
            f"Єдиний податок ({format_rate(profile.single_tax_rate)})",
            format_currency(calc.quarterly_single_tax),
            format_currency(calc.cumulative_single_tax),
        )
        table.add_row(
            f"Військовий збір ({format_rate(profile.military_tax_rate)})",
            format_currency(calc.quarterly_military_tax),
            format_currency(calc.cumulative_military_tax),
        )
        table.add_row(
            "ЄСВ",
            format_currency(calc.quarterly_social_contributions),
            format_currency(calc.cumulative_social_contributions),
        )
        console.print(table)

        console.print(
            f"[header]До сплати:[/header] єдиний податок "
            f"[currency]{format_currency(calc.single_tax_to_pay)}[/currency], "
            f"військовий збір [currency]{format_currency(calc.military_tax_to_pay)}[/currency]"
        )
        _print_limit(check_tax_limits(calc, profile))

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def declaration(
    year: YearArg,
    quarter: QuarterArg,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Каталог для XML файлів"),
    ] = Path("."),
    fill_date: Annotated[
        Optional[str],
        typer.Option("--fill-date", help="Дата заповнення (РРРР-ММ-ДД), типово сьогодні"),
    ] = None,
    with_esv: Annotated[
        bool,
        typer.Option("--esv/--no-esv", help="Додати звіт ЄСВ до річної декларації"),
    ] = True,
) -> None:
    """Формує XML декларації F0103309 (і F0133109 для 4 кварталу)."""
    filled = _parse_date(fill_date) if fill_date else None

    try:
        settings = get_settings()
        store = _store()
        profile = _require_profile(store)
        report = build_tax_report(profile, _year_data(store, year), quarter)

        errors = validate_report(report, profile)
        esv_report = None
        if quarter == 4 and with_esv:
            esv_report = build_esv_report(ESVSettingsRepository(store).load(year))
            errors += validate_esv_report(esv_report, profile)

        if errors:
            raise DeclarationError(
                "Декларацію не сформовано", list(dict.fromkeys(errors))
            )

        package = build_filing_package(
            profile,
            report,
            esv_report=esv_report,
            fill_date=filled,
            software=settings.software_name,
        )

        output_dir.mkdir(parents=True, exist_ok=True)
        for document in package.documents:
            path = output_dir / document.filename
            path.write_bytes(document.to_bytes())
            print_success(f"Збережено: {path}")

    except DeclarationError as e:
        print_error(str(e))
        for message in e.errors:
            console.print(f"  [error]•[/error] {message}")
        raise typer.Exit(1)
    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        print_error(f"Не вдалося записати файл: {e}")
        raise typer.Exit(1)


@app.command()
def preview(
    year: YearArg,
    quarter: QuarterArg,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML файл (типово declaration-РРРР-Q.html)"),
    ] = None,
) -> None:
    """Формує HTML-версію декларації для друку."""
    from fop_tax.infrastructure.reports import render_declaration_preview

    try:
        store = _store()
        profile = _require_profile(store)
        calc = build_quarterly_calculation(profile, _year_data(store, year), quarter)

        output = output or Path(f"declaration-{year}-{quarter}.html")
        output.write_text(render_declaration_preview(calc, profile), encoding="utf-8")
        print_success(f"Збережено: {output}")

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def pdf(
    year: YearArg,
    quarter: QuarterArg,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="PDF файл (типово summary-РРРР-Q.pdf)"),
    ] = None,
) -> None:
    """Формує PDF-звіт з розрахунком за квартал."""
    try:
        from fop_tax.infrastructure.reports import REPORTLAB_AVAILABLE, generate_pdf_report

        if not REPORTLAB_AVAILABLE:
            print_error(
                "ReportLab не встановлено. "
                "Встановіть: pip install 'fop-tax[pdf]' або pip install reportlab"
            )
            raise typer.Exit(1)

        settings = get_settings()
        store = _store()
        profile = _require_profile(store)
        calc = build_quarterly_calculation(profile, _year_data(store, year), quarter)

        output = output or Path(f"summary-{year}-{quarter}.pdf")
        console.print("[muted]Формування PDF...[/muted]")
        generate_pdf_report(
            calc,
            profile,
            output,
            limit_check=check_tax_limits(calc, profile),
            font_path=settings.pdf_font_path,
        )
        print_success(f"Звіт збережено: {output}")

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


# === Profile ===


@profile_app.command("show")
def profile_show() -> None:
    """Показує профіль ФОП."""
    profile = ProfileRepository(_store()).load()
    if profile is None:
        print_info("Профіль ще не заповнено")
        return

    table = Table(show_header=False)
    table.add_column("Поле", style="header")
    table.add_column("Значення", overflow="fold")
    table.add_row("ПІБ", profile.full_name)
    table.add_row("РНОКПП", mask_tin(profile.tin))
    table.add_row("Адреса", profile.address.format())
    table.add_row("Телефон", profile.phone)
    table.add_row("Email", profile.email)
    table.add_row("Податкова", f"{profile.tax_office.code} {profile.tax_office.name}".strip())
    for kved in profile.kved.all():
        table.add_row("КВЕД", f"{kved.code} {kved.name}")
    table.add_row("Група", str(profile.tax_group))
    table.add_row("Річний ліміт", format_currency(profile.yearly_income_limit))
    console.print(table)

    for message in validate_profile(profile):
        print_warning(message)


@profile_app.command("load")
def profile_load(
    source: Annotated[
        Path,
        typer.Argument(help="JSON файл профілю", exists=True, dir_okay=False, readable=True),
    ],
) -> None:
    """Завантажує профіль ФОП з JSON файлу."""
    from pydantic import ValidationError as PydanticValidationError

    try:
        profile = FOPProfile.model_validate_json(source.read_text(encoding="utf-8"))
    except PydanticValidationError as e:
        print_error(f"Некоректний профіль: {e.error_count()} помилок")
        for err in e.errors():
            console.print(f"  [error]•[/error] {'.'.join(map(str, err['loc']))}: {err['msg']}")
        raise typer.Exit(1)

    try:
        ProfileRepository(_store()).save(profile)
    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success("Профіль збережено")
    for message in validate_profile(profile):
        print_warning(message)


# === ЄСВ ===


@esv_app.command("show")
def esv_show(year: YearArg) -> None:
    """Показує помісячний розрахунок ЄСВ за рік."""
    report = build_esv_report(ESVSettingsRepository(_store()).load(year))

    table = Table(show_header=True, header_style="bold", title=f"ЄСВ {year}")
    table.add_column("Місяць", justify="right")
    table.add_column("База", justify="right")
    table.add_column("Ставка", justify="right")
    table.add_column("Внесок", justify="right", style="currency")
    for month in report.months:
        table.add_row(
            str(month.month),
            format_currency(month.income_base),
            format_percentage(month.contribution_rate),
            format_currency(month.contribution_amount),
        )
    table.add_row(
        "[bold]Разом[/bold]",
        format_currency(report.total_income_base),
        "",
        format_currency(report.total_contribution_amount),
    )
    console.print(table)


@esv_app.command("set")
def esv_set(
    year: YearArg,
    month: Annotated[int, typer.Argument(help="Місяць (1-12)", min=1, max=12)],
    income_base: Annotated[str, typer.Argument(help="База нарахування, грн")],
    contribution_rate: Annotated[str, typer.Argument(help="Ставка, %")] = "22",
    until_year_end: Annotated[
        bool,
        typer.Option("--from", help="Застосувати до всіх місяців до кінця року"),
    ] = False,
) -> None:
    """Змінює базу та ставку ЄСВ для місяця."""
    base = _parse_amount(income_base)
    percent = _parse_amount(contribution_rate)
    if percent == 0 or percent > 100:
        print_error("Ставка ЄСВ повинна бути від 0 до 100%")
        raise typer.Exit(1)

    try:
        store = _store()
        repo = ESVSettingsRepository(store)
        settings = repo.load(year)

        if until_year_end:
            settings = update_month_settings_from(settings, month, base, percent)
        else:
            settings = update_month_settings(settings, month, base, percent)
        repo.save(settings)

        accumulated = AccumulatedDataRepository(store)
        accumulated.save(apply_social_contributions(accumulated.load(year), settings))

        print_success("Налаштування ЄСВ збережено")

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


@esv_app.command("preview")
def esv_preview(
    year: YearArg,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML файл (типово esv-РРРР.html)"),
    ] = None,
) -> None:
    """Формує HTML-версію звіту ЄСВ для друку."""
    from fop_tax.infrastructure.reports import render_esv_preview

    try:
        store = _store()
        profile = _require_profile(store)
        report = build_esv_report(ESVSettingsRepository(store).load(year))

        output = output or Path(f"esv-{year}.html")
        output.write_text(render_esv_preview(report, profile), encoding="utf-8")
        print_success(f"Збережено: {output}")

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


# === Backup ===


@backup_app.command("export")
def backup_export(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Файл резервної копії"),
    ] = None,
) -> None:
    """Зберігає всі дані в один JSON файл."""
    output = output or Path(f"fop-data-backup-{date.today().isoformat()}.json")
    output.write_text(export_all_data(_store()), encoding="utf-8")
    print_success(f"Резервну копію збережено: {output}")


@backup_app.command("import")
def backup_import(
    source: Annotated[
        Path,
        typer.Argument(help="Файл резервної копії", exists=True, dir_okay=False),
    ],
    keep_profile: Annotated[
        bool, typer.Option("--keep-profile", help="Не замінювати профіль")
    ] = False,
) -> None:
    """Відновлює дані з резервної копії."""
    try:
        store = _store()
        imported = read_backup_file(source)
        years = set(AccumulatedDataRepository(store).years())
        apply_imported_data(store, imported, replace_profile=not keep_profile)

        # every stored year is rebuilt from the replaced payment list
        payments = PaymentRepository(store).load_all()
        years |= set(AccumulatedDataRepository(store).years())
        years |= {p.date.year for p in payments}
        _ledger(store).engine.accumulate_years(payments, years)

        print_success(f"Імпортовано платежів: {len(imported.payments)}")

    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)


@backup_app.command("info")
def backup_info() -> None:
    """Показує вміст локального сховища."""
    info = get_storage_info(_store())

    table = Table(show_header=True, header_style="bold")
    table.add_column("Ключ")
    table.add_column("Розмір", justify="right")
    for item in info.items:
        table.add_row(item.key, format_file_size(item.size))
    console.print(table)
    console.print(
        f"[header]Записів:[/header] {info.item_count}, "
        f"[header]разом:[/header] {info.total_size_display}"
    )


@backup_app.command("clear")
def backup_clear(
    yes: Annotated[bool, typer.Option("--yes", help="Без підтвердження")] = False,
) -> None:
    """Видаляє всі дані застосунку."""
    if not yes:
        typer.confirm("Видалити всі дані?", abort=True)

    try:
        removed = clear_all_data(_store())
    except FopTaxError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Видалено записів: {removed}")


if __name__ == "__main__":
    app()

# bloodbank/management/commands/bloodbank.py
import getpass
import sys

from django import forms
from django.conf import settings
from django.core.management.base import BaseCommand

from bloodbank.accounts import AccountDirectory
from bloodbank.audit import log_event
from bloodbank.exceptions import IneligibleDonation, InvalidBloodType
from bloodbank.forms import (
    CompatibleSearchForm, EmergencyDonationForm, LoginForm, RegularDonationForm,
    SignupForm, menu_choice_field,
)
from bloodbank.models import DonationKind, describe
from bloodbank.registry import DonationRegistry

INDENT = "\t\t\t\t"
CLEAR_SCREEN = "\033[H\033[2J"

BANK_BANNER = [
    "================================================",
    "--     BBBB      AAA     N   N    K     K     --",
    "--     B   B    A   A    NN  N    K    K      --",
    "--     BBBB     AAAAA    N N N    K K K       --",
    "--     B   B    A   A    N  NN    K    K      --",
    "--     BBBB     A   A    N   N    K     K     --",
    "================================================",
]

MENU_BANNER = [
    "==================================================",
    "--     M     M    EEEEE    N     N    U   U     --",
    "--     M M M M    E        N N   N    U   U     --",
    "--     M  M  M    EEEE     N  N  N    U   U     --",
    "--     M     M    E        N   N N    U   U     --",
    "--     M     M    EEEEE    N     N    UUUUU     --",
    "==================================================",
]

LOGIN_MENU = ["Login", "Create New Account", "Exit"]
DONOR_MENU = [
    "Add Regular Donation",
    "Add Emergency Donation",
    "List Donations",
    "Find Compatible Donations",
    "Log out",
]
LIST_MENU = ["View Regular Donations", "View Emergency Donations", "Return to Donor Menu"]


class EndOfInput(Exception):
    pass


class Command(BaseCommand):
    help = "Interactive blood bank console: log in, record donations and search them."

    # Used for testing
    stealth_options = ("stdin",)

    def add_arguments(self, parser):
        parser.add_argument("--no-banner", action="store_true",
                            help="Don't print the ASCII banners above the menus")

    def handle(self, *args, **opts):
        self.stdin = opts.get("stdin", sys.stdin)
        self.show_banner = not opts["no_banner"]
        self.registry = DonationRegistry()
        self.directory = AccountDirectory()

        try:
            self.login_menu()
        except EndOfInput:
            self.stdout.write("")
        self.stdout.write(self.style.SUCCESS(f"\n{INDENT}Exiting the system...\n"))

    # ------------------------ output helpers ------------------------
    def clear_screen(self):
        if getattr(settings, "BLOOD_BANK_CLEAR_SCREEN", True) and self.stdout.isatty():
            self.stdout.write(CLEAR_SCREEN, ending="")

    def banner(self, lines):
        if self.show_banner:
            self.stdout.write(self.style.MIGRATE_HEADING(
                "\n" + "\n".join(INDENT + line for line in lines)
            ))

    def heading(self, title):
        rule = "=" * (len(title) + 12)
        self.stdout.write(self.style.MIGRATE_HEADING(
            f"\n{INDENT}{rule}\n{INDENT}---     {title}     ---\n{INDENT}{rule}"
        ))

    def error(self, message):
        self.stdout.write(self.style.ERROR(f"{INDENT}--- {message} ---"))

    def success(self, message):
        self.stdout.write(self.style.SUCCESS(f"\n{INDENT}--- {message} ---"))

    def show_donation(self, donation):
        self.stdout.write("\n".join(INDENT + line for line in describe(donation).splitlines()))
        self.stdout.write("")

    # ------------------------ input helpers ------------------------
    def readline(self, prompt):
        self.stdout.write(self.style.WARNING(INDENT + prompt), ending="")
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EndOfInput
        return line.rstrip("\r\n")

    def read_secret(self, prompt):
        if self.stdin is sys.stdin and sys.stdin.isatty():
            try:
                return getpass.getpass(INDENT + prompt)
            except EOFError:
                raise EndOfInput
        return self.readline(prompt)

    def ask(self, field):
        """
        Prompt until the raw answer passes field.clean(); return the raw text.
        """
        while True:
            prompt = f"{field.label}: "
            if isinstance(field.widget, forms.PasswordInput):
                raw = self.read_secret(prompt)
            else:
                raw = self.readline(prompt)
            try:
                field.clean(raw)
            except forms.ValidationError as e:
                self.error(" ".join(e.messages))
                continue
            return raw

    def fill(self, form_class, **kwargs):
        """Ask every field of form_class in order and return the bound form."""
        data = {name: self.ask(field) for name, field in form_class(**kwargs).fields.items()}
        return form_class(data, **kwargs)

    def choose(self, title, options):
        """
        Show a numbered menu and return the picked number, or None after
        printing why the answer was rejected.
        """
        if title:
            self.stdout.write(self.style.MIGRATE_HEADING(f"{INDENT}{title}\n"))
        for number, label in enumerate(options, start=1):
            self.stdout.write(f"{INDENT}{number}. {label}")
        raw = self.readline("\nEnter your choice: ")
        try:
            return menu_choice_field(options).clean(raw)
        except forms.ValidationError as e:
            self.error(" ".join(e.messages))
            return None

    # ------------------------ menus ------------------------
    def login_menu(self):
        while True:
            self.banner(BANK_BANNER)
            choice = self.choose("----- Blood Bank Login Menu -----", LOGIN_MENU)
            if choice == 1:
                self.clear_screen()
                username = self.login()
                if username:
                    self.donor_menu(username)
            elif choice == 2:
                self.clear_screen()
                self.create_account()
            elif choice == 3:
                return

    def login(self):
        self.heading("Log In")
        form = self.fill(LoginForm, directory=self.directory)
        if not form.is_valid():
            log_event("login_failed", user=form.data.get("username"))
            self.error(" ".join(form.non_field_errors()) or "Account Does Not Exist!")
            return None
        username = form.get_username()
        log_event("login", user=username)
        return username

    def create_account(self):
        self.heading("Create New Account")
        fields = SignupForm(directory=self.directory).fields

        username = self.ask(fields["username"])
        form = SignupForm({"username": username}, directory=self.directory)
        if "username" in form.errors:
            log_event("signup_rejected", user=username)
            self.error(" ".join(form.errors["username"]))
            return

        password = self.ask(fields["password"])
        form = SignupForm({"username": username, "password": password}, directory=self.directory)
        if not form.is_valid():
            log_event("signup_rejected", user=username)
            for errors in form.errors.values():
                self.error(" ".join(errors))
            return
        form.save()
        log_event("signup", user=username)
        self.success("Account created successfully!")

    def donor_menu(self, username):
        self.clear_screen()
        while True:
            self.banner(MENU_BANNER)
            choice = self.choose("-------- Donor Menu --------", DONOR_MENU)
            if choice == 1:
                self.clear_screen()
                self.add_donation(RegularDonationForm, "Add Regular Donation Menu", username)
            elif choice == 2:
                self.clear_screen()
                self.add_donation(EmergencyDonationForm, "Add Emergency Donation Menu", username)
            elif choice == 3:
                self.clear_screen()
                self.list_donations()
            elif choice == 4:
                self.clear_screen()
                self.find_compatible(username)
            elif choice == 5:
                log_event("logout", user=username)
                self.clear_screen()
                return

    def add_donation(self, form_class, title, username):
        self.heading(title)
        form = self.fill(form_class)
        if not form.is_valid():
            for errors in form.errors.values():
                self.error(" ".join(errors))
            return

        try:
            donation = form.save(self.registry)
        except IneligibleDonation as e:
            log_event("donation_rejected", user=username,
                      kind=e.donation.kind, reasons=len(e.reasons))
            self.stdout.write(self.style.ERROR(f"\n{INDENT}--- Donation failed ---"))
            self.stdout.write(self.style.ERROR(f"\n{INDENT}Requirements:"))
            for reason in e.reasons:
                self.stdout.write(self.style.ERROR(f"{INDENT}- {reason}"))
            return

        log_event("donation_create", user=username, kind=donation.kind,
                  blood_type=donation.blood_type, amount_ml=donation.amount_ml)
        self.success("Donation added successfully!")

    def list_donations(self):
        while True:
            self.heading("List Donations Menu")
            choice = self.choose("", LIST_MENU)
            if choice == 1:
                self.show_kind(DonationKind.REGULAR)
            elif choice == 2:
                self.show_kind(DonationKind.EMERGENCY)
            elif choice == 3:
                return

    def show_kind(self, kind):
        self.stdout.write(f"\n{INDENT}{kind.label} Donations:\n")
        donations = self.registry.list_by_kind(kind)
        if not donations:
            self.error(f"No {kind.label.lower()} donations recorded")
            return
        for donation in donations:
            self.show_donation(donation)

    def find_compatible(self, username):
        self.heading("Find Compatible Donations")
        form = self.fill(CompatibleSearchForm)
        blood_type = form.cleaned_data["blood_type"] if form.is_valid() else form.data["blood_type"]
        try:
            matches = self.registry.find_compatible(blood_type)
        except InvalidBloodType as e:
            self.error(str(e))
            return

        log_event("compatible_search", user=username, blood_type=blood_type, matches=len(matches))
        self.stdout.write(f"\n{INDENT}Compatible Donations for {blood_type}:\n")
        if not matches:
            self.error("No compatible donations found")
            return
        for donation in matches:
            self.show_donation(donation)

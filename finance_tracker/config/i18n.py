"""
UI Labels

Every user-visible label in the Streamlit frontend, in English and Bangla.
The active language comes from ``Preferences.language``.

Lookups fall back to English, then to the key itself, so a missing
translation shows up as readable text rather than an error.
"""

from typing import Callable

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "appTitle": "Gopa-Gop",
        "dashboard": "Dashboard",
        "history": "History",
        "addNew": "Add New",
        "settings": "Settings",
        "currentBalance": "Current Balance",
        "totalIncome": "Total Income",
        "totalExpense": "Total Expense",
        "totalDebt": "I Owe",
        "totalReceivable": "Owed To Me",
        "aiAdvisor": "AI Financial Advisor",
        "aiDesc": "Get personalized insights based on your spending.",
        "analyze": "Analyze Finances",
        "analyzing": "Analyzing...",
        "expenseCategory": "Expense by Category",
        "noExpenses": "No expenses recorded yet.",
        "noTransactions": "No transactions found. Add one to get started!",
        "reload": "Reload",
        "type": "Type",
        "date": "Date",
        "category": "Category",
        "note": "Note",
        "amount": "Amount",
        "person": "Person",
        "personHelp": "Who is this loan with?",
        "income": "Income",
        "expense": "Expense",
        "loan": "Loan",
        "paymentMethod": "Payment Method",
        "optional": "Optional",
        "with": "with",
        "saveTransaction": "Save Transaction",
        "editTransaction": "Edit Transaction",
        "updateTransaction": "Update Transaction",
        "transaction": "Transaction",
        "saved": "Transaction saved",
        "updated": "Transaction updated",
        "saveFailed": "Could not save the transaction. Please try again.",
        "loginTitle": "Welcome Back",
        "loginSubtitle": "Enter your credentials to access your finances",
        "username": "Username",
        "password": "Password",
        "loginBtn": "Sign In",
        "registerBtn": "Create Account",
        "loadingTransactions": "Loading your transactions...",
        "signedInAs": "Signed in as",
        "logout": "Logout",
        "preferences": "Preferences",
        "currency": "Currency",
        "language": "Language",
        "darkTheme": "Switch to dark theme",
        "lightTheme": "Switch to light theme",
        "profile": "Profile",
        "avatarUrl": "Profile picture URL",
        "saveProfile": "Save Profile",
        "profileUpdated": "Profile updated",
        "profileFailed": "Could not update your profile",
        "connectionStatus": "Connection Status",
        "configured": "Configured",
        "configHelp": (
            "To configure the application, create a `.env` file with your credentials. "
            "Without Google Sheets, data is kept in memory for this session only."
        ),
    },
    "bn": {
        "appTitle": "গপা-গপ",
        "dashboard": "ড্যাশবোর্ড",
        "history": "ইতিহাস",
        "addNew": "নতুন যোগ করুন",
        "settings": "সেটিংস",
        "currentBalance": "বর্তমান ব্যালেন্স",
        "totalIncome": "মোট আয়",
        "totalExpense": "মোট ব্যয়",
        "totalDebt": "আমার দেনা",
        "totalReceivable": "আমার পাওনা",
        "aiAdvisor": "এআই আর্থিক পরামর্শদাতা",
        "aiDesc": "আপনার খরচের উপর ভিত্তি করে ব্যক্তিগত পরামর্শ পান।",
        "analyze": "বিশ্লেষণ করুন",
        "analyzing": "বিশ্লেষণ চলছে...",
        "expenseCategory": "বিভাগ অনুযায়ী খরচ",
        "noExpenses": "এখনও কোন খরচ রেকর্ড করা হয়নি।",
        "noTransactions": "কোন লেনদেন পাওয়া যায়নি। শুরু করতে একটি যোগ করুন!",
        "reload": "রিফ্রেশ",
        "type": "ধরন",
        "date": "তারিখ",
        "category": "বিভাগ",
        "note": "নোট",
        "amount": "পরিমাণ",
        "person": "ব্যক্তি",
        "personHelp": "কার সাথে এই ঋণ?",
        "income": "আয়",
        "expense": "ব্যয়",
        "loan": "ঋণ",
        "paymentMethod": "পেমেন্ট মেথড",
        "optional": "ঐচ্ছিক",
        "with": "সাথে",
        "saveTransaction": "সংরক্ষণ করুন",
        "editTransaction": "লেনদেন সম্পাদনা",
        "updateTransaction": "আপডেট করুন",
        "transaction": "লেনদেন",
        "saved": "লেনদেন সংরক্ষিত হয়েছে",
        "updated": "লেনদেন আপডেট হয়েছে",
        "saveFailed": "লেনদেন সংরক্ষণ করা যায়নি। আবার চেষ্টা করুন।",
        "loginTitle": "স্বাগতম",
        "loginSubtitle": "আপনার অর্থ ব্যবস্থাপনায় প্রবেশ করতে লগ ইন করুন",
        "username": "ব্যবহারকারীর নাম",
        "password": "পাসওয়ার্ড",
        "loginBtn": "লগ ইন",
        "registerBtn": "অ্যাকাউন্ট তৈরি করুন",
        "loadingTransactions": "আপনার লেনদেন লোড হচ্ছে...",
        "signedInAs": "লগ ইন করেছেন",
        "logout": "লগ আউট",
        "preferences": "পছন্দসমূহ",
        "currency": "মুদ্রা",
        "language": "ভাষা",
        "darkTheme": "ডার্ক থিমে যান",
        "lightTheme": "লাইট থিমে যান",
        "profile": "প্রোফাইল",
        "avatarUrl": "প্রোফাইল ছবির URL",
        "saveProfile": "প্রোফাইল সংরক্ষণ",
        "profileUpdated": "প্রোফাইল আপডেট হয়েছে",
        "profileFailed": "প্রোফাইল আপডেট করা যায়নি",
        "connectionStatus": "সংযোগের অবস্থা",
        "configured": "কনফিগার করা হয়েছে",
        "configHelp": (
            "অ্যাপ্লিকেশন কনফিগার করতে আপনার তথ্য দিয়ে একটি `.env` ফাইল তৈরি করুন। "
            "Google Sheets ছাড়া ডেটা শুধু এই সেশনের জন্য মেমোরিতে থাকে।"
        ),
    },
}


def translate(language: str, key: str) -> str:
    labels = TRANSLATIONS.get(language, TRANSLATIONS["en"])
    return labels.get(key) or TRANSLATIONS["en"].get(key, key)


def translator(language: str) -> Callable[[str], str]:
    """Bind ``translate`` to one language, for ``t("dashboard")`` style lookups."""
    return lambda key: translate(language, key)

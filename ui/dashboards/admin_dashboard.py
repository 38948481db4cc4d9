from typing import List, Optional, Tuple

from PySide6 import QtWidgets, QtCore, QtGui

import config
from core.exceptions import GymError
from models.member import Member
from models.trainer import Trainer
from services.admin_service import AdminStore, gym_stats
from services.auth_service import sign_out
from services.file_manager import photo_full_path
from services.member_service import MemberStore, PaymentFilter, delete_member, filter_members
from services.payment_service import PaymentCycleTracker
from services.trainer_service import TrainerStore, delete_trainer, filter_trainers
from workers.save_worker import SaveWorker

# Dialogs
from ui.dialogs.admin_dialog import AdminDialog
from ui.dialogs.member_dialog import MemberDialog
from ui.dialogs.photo_picker import circle_pixmap
from ui.dialogs.trainer_dialog import TrainerDialog

TABLE_STYLE = (
    "QHeaderView::section { background-color: #333; color: white; padding: 5px; } "
    "QTableWidget { gridline-color: #444; }"
)


class AdminDashboard(QtWidgets.QMainWindow):
    """
    The main window once signed in.
    Sidebar pages: Gym Owner (profile, totals, quotes), Members and Trainers.
    """
    logout_signal = QtCore.Signal()

    def __init__(self, admin_store: AdminStore, member_store: MemberStore,
                 trainer_store: TrainerStore, tracker: PaymentCycleTracker):
        super().__init__()
        self.setWindowTitle(f"💪 {config.APP_NAME} - Dashboard")
        self.resize(1200, 800)

        self.admin_store = admin_store
        self.member_store = member_store
        self.trainer_store = trainer_store
        self.tracker = tracker

        # ThreadPool for store work (payment reset, toggles)
        self.pool = QtCore.QThreadPool()
        self.pool.setMaxThreadCount(1)

        self.members: List[Member] = []
        self.shown_members: List[Member] = []
        self.trainers: List[Trainer] = []
        self.quote_index = 0

        self.init_ui()
        self.apply_style()
        self.show_owner_page()

    def init_ui(self) -> None:
        cw = QtWidgets.QWidget()
        self.setCentralWidget(cw)
        layout = QtWidgets.QHBoxLayout(cw)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- SIDEBAR ---
        sidebar = QtWidgets.QVBoxLayout()
        sidebar.setContentsMargins(10, 10, 10, 10)
        sidebar.addWidget(QtWidgets.QLabel(f"💪 {config.APP_NAME}"))
        sidebar.addSpacing(10)

        self.b_own = QtWidgets.QPushButton("🏋️ Gym Owner")
        self.b_mem = QtWidgets.QPushButton("👤 Members")
        self.b_trn = QtWidgets.QPushButton("🥊 Trainers")
        for b in (self.b_own, self.b_mem, self.b_trn):
            b.setMinimumHeight(40)
            b.setCursor(QtCore.Qt.PointingHandCursor)
            sidebar.addWidget(b)

        sidebar.addStretch()
        self.b_out = QtWidgets.QPushButton("🚪 Logout")
        self.b_out.clicked.connect(self.logout)
        sidebar.addWidget(self.b_out)

        sw = QtWidgets.QWidget()
        sw.setLayout(sidebar)
        sw.setMaximumWidth(230)
        sw.setStyleSheet("border-right:2px solid #333;background:#111")
        layout.addWidget(sw)

        # --- CONTENT AREA ---
        self.stacked = QtWidgets.QStackedWidget()
        layout.addWidget(self.stacked, 1)

        self.p_own = QtWidgets.QWidget()
        self.init_owner_page()
        self.stacked.addWidget(self.p_own)

        self.p_mem = QtWidgets.QWidget()
        self.init_member_page()
        self.stacked.addWidget(self.p_mem)

        self.p_trn = QtWidgets.QWidget()
        self.init_trainer_page()
        self.stacked.addWidget(self.p_trn)

        self.b_own.clicked.connect(self.show_owner_page)
        self.b_mem.clicked.connect(self.show_member_page)
        self.b_trn.clicked.connect(self.show_trainer_page)

    # --- GYM OWNER ---
    def init_owner_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_own)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(QtWidgets.QLabel("🏋️ Gym Owner"))
        top.addStretch()
        self.b_add_admin = QtWidgets.QPushButton("➕ Register Gym Owner")
        self.b_add_admin.clicked.connect(self.add_admin)
        top.addWidget(self.b_add_admin)
        layout.addLayout(top)

        self.owner_box = QtWidgets.QVBoxLayout()
        layout.addLayout(self.owner_box)

        # Totals
        stats = QtWidgets.QHBoxLayout()
        card, self.lbl_members = self._stat_card("Total Members")
        stats.addWidget(card)
        card, self.lbl_trainers = self._stat_card("Total Trainers")
        stats.addWidget(card)
        layout.addLayout(stats)

        # Rotating motivational quote
        self.lbl_quote = QtWidgets.QLabel(config.GYM_QUOTES[0])
        self.lbl_quote.setAlignment(QtCore.Qt.AlignCenter)
        self.lbl_quote.setWordWrap(True)
        self.lbl_quote.setMinimumHeight(200)
        self.lbl_quote.setStyleSheet(
            "background:#1a1a1a;border-radius:22px;color:#ffd400;font-size:22px;font-weight:bold;padding:20px")
        layout.addWidget(self.lbl_quote)
        layout.addStretch()

        self.quote_timer = QtCore.QTimer(self)
        self.quote_timer.timeout.connect(self.next_quote)
        self.quote_timer.start(config.QUOTE_INTERVAL_MS)

    def _stat_card(self, title: str) -> Tuple[QtWidgets.QFrame, QtWidgets.QLabel]:
        card = QtWidgets.QFrame()
        card.setStyleSheet("background:#1a1a1a;border-radius:12px")
        v = QtWidgets.QVBoxLayout(card)
        t = QtWidgets.QLabel(title)
        t.setAlignment(QtCore.Qt.AlignCenter)
        t.setStyleSheet("color:#ccc")
        n = QtWidgets.QLabel("0")
        n.setAlignment(QtCore.Qt.AlignCenter)
        n.setStyleSheet("color:#ffd400;font-size:32px;font-weight:bold")
        v.addWidget(t)
        v.addWidget(n)
        return card, n

    def next_quote(self) -> None:
        self.quote_index = (self.quote_index + 1) % len(config.GYM_QUOTES)
        self.lbl_quote.setText(config.GYM_QUOTES[self.quote_index])

    def show_owner_page(self) -> None:
        self.stacked.setCurrentWidget(self.p_own)

        # Clear previous owner cards
        while self.owner_box.count():
            item = self.owner_box.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        try:
            admins = self.admin_store.list()
            stats = gym_stats(self.member_store, self.trainer_store)
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            return

        if not admins:
            empty = QtWidgets.QLabel("No Gym Owner Yet\nRegister a gym owner to get started!")
            empty.setAlignment(QtCore.Qt.AlignCenter)
            empty.setStyleSheet("font-size:18px;color:#aaa;padding:30px")
            self.owner_box.addWidget(empty)

        for a in admins:
            self.owner_box.addWidget(self._owner_card(a))

        # One gym per install
        self.b_add_admin.setVisible(not admins)
        self.lbl_members.setText(str(stats["members"]))
        self.lbl_trainers.setText(str(stats["trainers"]))

    def _owner_card(self, admin) -> QtWidgets.QWidget:
        card = QtWidgets.QFrame()
        card.setStyleSheet("background:#1a1a1a;border-radius:15px")
        h = QtWidgets.QHBoxLayout(card)

        h.addWidget(self._avatar(admin.photo_path, 70))

        info = QtWidgets.QLabel(
            f"<b>{admin.name}</b><br>{admin.gym_name}<br><span style='color:#ffd400'>{admin.gym_address}</span>")
        h.addWidget(info, 1)

        b_edit = QtWidgets.QPushButton("✏️")
        b_edit.setToolTip("Edit gym owner")
        b_edit.clicked.connect(lambda checked=False, x=admin: self.edit_admin(x))
        h.addWidget(b_edit)
        return card

    def add_admin(self) -> None:
        if AdminDialog(self.admin_store, parent=self).exec() == QtWidgets.QDialog.Accepted:
            self.show_owner_page()

    def edit_admin(self, admin) -> None:
        if AdminDialog(self.admin_store, admin, parent=self).exec() == QtWidgets.QDialog.Accepted:
            self.show_owner_page()

    # --- MEMBERS ---
    def init_member_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_mem)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(QtWidgets.QLabel("👤 Members"))
        top.addStretch()
        b_add = QtWidgets.QPushButton("➕ Member")
        b_add.clicked.connect(self.add_member)
        top.addWidget(b_add)
        layout.addLayout(top)

        h = QtWidgets.QHBoxLayout()
        self.search = QtWidgets.QLineEdit()
        self.search.setPlaceholderText("Search by Name, Age, or Type")
        self.search.textChanged.connect(self.refresh_member_table)
        self.filter = QtWidgets.QComboBox()
        for f in PaymentFilter:
            self.filter.addItem(f.value)
        self.filter.currentIndexChanged.connect(self.refresh_member_table)
        h.addWidget(self.search, 1)
        h.addWidget(self.filter)
        layout.addLayout(h)

        self.mem_table = QtWidgets.QTableWidget()
        self.mem_table.setColumnCount(7)
        self.mem_table.setHorizontalHeaderLabels(["Photo", "Name", "Age", "Membership", "Phone", "Status", "Action"])
        self.mem_table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        self.mem_table.verticalHeader().setDefaultSectionSize(64)
        self.mem_table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.mem_table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.mem_table.setStyleSheet(TABLE_STYLE)
        layout.addWidget(self.mem_table)

        self.lbl_empty = QtWidgets.QLabel("No Members Yet\nClick '➕ Member' to add a member!")
        self.lbl_empty.setAlignment(QtCore.Qt.AlignCenter)
        self.lbl_empty.setStyleSheet("font-size:18px;color:#aaa")
        layout.addWidget(self.lbl_empty)

    def show_member_page(self) -> None:
        """Runs the monthly payment reset (if due) before listing members."""
        self.stacked.setCurrentWidget(self.p_mem)
        w = SaveWorker(self.tracker.reset_if_month_changed)
        w.signals.finished.connect(lambda _: self.load_members())
        w.signals.error.connect(self._reset_failed)
        self.pool.start(w)

    def _reset_failed(self, msg: str) -> None:
        QtWidgets.QMessageBox.warning(
            self, "Payment Reset", f"Could not reset monthly payments, will retry next time.\n{msg}")
        self.load_members()

    def load_members(self) -> None:
        try:
            self.members = self.member_store.list()
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            self.members = []
        self.refresh_member_table()

    def refresh_member_table(self) -> None:
        self.shown_members = filter_members(self.members, self.search.text(),
                                           PaymentFilter(self.filter.currentText()))
        self.lbl_empty.setVisible(not self.members)
        self.mem_table.setVisible(bool(self.members))

        self.mem_table.setRowCount(0)
        for i, m in enumerate(self.shown_members):
            self.mem_table.insertRow(i)
            self.mem_table.setCellWidget(i, 0, self._avatar(m.photo_path, 56))
            self.mem_table.setItem(i, 1, QtWidgets.QTableWidgetItem(m.name))
            self.mem_table.setItem(i, 2, QtWidgets.QTableWidgetItem(m.age))
            self.mem_table.setItem(i, 3, QtWidgets.QTableWidgetItem(m.membership_type.value))
            self.mem_table.setItem(i, 4, QtWidgets.QTableWidgetItem(m.phone))

            status = QtWidgets.QTableWidgetItem(m.payment_label)
            status.setForeground(QtGui.QColor("#2ecc71" if m.is_paid else "#e74c3c"))
            self.mem_table.setItem(i, 5, status)

            w = QtWidgets.QWidget()
            h = QtWidgets.QHBoxLayout(w)
            h.setContentsMargins(0, 0, 0, 0)

            b_pay = QtWidgets.QPushButton("💰 Toggle")
            b_pay.clicked.connect(lambda c=False, x=m: self.toggle_paid(x))
            b_edit = QtWidgets.QPushButton("✏️")
            b_edit.clicked.connect(lambda c=False, x=m: self.edit_member(x))
            b_del = QtWidgets.QPushButton("🗑️")
            b_del.setStyleSheet("background:#500;color:white")
            b_del.clicked.connect(lambda c=False, x=m: self.remove_member(x))

            h.addWidget(b_pay)
            h.addWidget(b_edit)
            h.addWidget(b_del)
            self.mem_table.setCellWidget(i, 6, w)

    def toggle_paid(self, member: Member) -> None:
        # Only going from Paid back to Unpaid needs confirmation
        if member.is_paid and QtWidgets.QMessageBox.question(
            self, "Are you sure?", "Do you really want to mark this member as unpaid?",
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
        ) != QtWidgets.QMessageBox.Yes:
            return

        w = SaveWorker(self.tracker.toggle_paid, member.id)
        w.signals.finished.connect(lambda _: self.load_members())
        w.signals.error.connect(self._toggle_failed)
        self.pool.start(w)

    def _toggle_failed(self, msg: str) -> None:
        QtWidgets.QMessageBox.critical(self, "Error", msg)
        self.load_members()

    def add_member(self) -> None:
        if MemberDialog(self.member_store, parent=self).exec() == QtWidgets.QDialog.Accepted:
            self.load_members()

    def edit_member(self, member: Member) -> None:
        if MemberDialog(self.member_store, member, parent=self).exec() == QtWidgets.QDialog.Accepted:
            self.load_members()

    def remove_member(self, member: Member) -> None:
        if QtWidgets.QMessageBox.question(
            self, "Delete Member?", f"Are you sure you want to delete {member.name}?",
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
        ) != QtWidgets.QMessageBox.Yes:
            return

        try:
            delete_member(self.member_store, member)
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
        self.load_members()

    # --- TRAINERS ---
    def init_trainer_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_trn)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(QtWidgets.QLabel("🥊 Trainers"))
        top.addStretch()
        b_add = QtWidgets.QPushButton("➕ Trainer")
        b_add.clicked.connect(self.add_trainer)
        top.addWidget(b_add)
        layout.addLayout(top)

        self.trn_search = QtWidgets.QLineEdit()
        self.trn_search.setPlaceholderText("Search by Name, Speciality, or Number")
        self.trn_search.textChanged.connect(self.refresh_trainer_table)
        layout.addWidget(self.trn_search)

        self.trn_table = QtWidgets.QTableWidget()
        self.trn_table.setColumnCount(5)
        self.trn_table.setHorizontalHeaderLabels(["Photo", "Name", "Phone", "Speciality", "Action"])
        self.trn_table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        self.trn_table.verticalHeader().setDefaultSectionSize(64)
        self.trn_table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.trn_table.setStyleSheet(TABLE_STYLE)
        layout.addWidget(self.trn_table)

    def show_trainer_page(self) -> None:
        self.stacked.setCurrentWidget(self.p_trn)
        self.load_trainers()

    def load_trainers(self) -> None:
        try:
            self.trainers = self.trainer_store.list()
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            self.trainers = []
        self.refresh_trainer_table()

    def refresh_trainer_table(self) -> None:
        self.trn_table.setRowCount(0)
        for i, t in enumerate(filter_trainers(self.trainers, self.trn_search.text())):
            self.trn_table.insertRow(i)
            self.trn_table.setCellWidget(i, 0, self._avatar(t.photo_path, 56))
            self.trn_table.setItem(i, 1, QtWidgets.QTableWidgetItem(t.name))
            self.trn_table.setItem(i, 2, QtWidgets.QTableWidgetItem(t.phone))
            self.trn_table.setItem(i, 3, QtWidgets.QTableWidgetItem(t.speciality.value))

            w = QtWidgets.QWidget()
            h = QtWidgets.QHBoxLayout(w)
            h.setContentsMargins(0, 0, 0, 0)
            b_edit = QtWidgets.QPushButton("✏️")
            b_edit.clicked.connect(lambda c=False, x=t: self.edit_trainer(x))
            b_del = QtWidgets.QPushButton("🗑️")
            b_del.setStyleSheet("background:#500;color:white")
            b_del.clicked.connect(lambda c=False, x=t: self.remove_trainer(x))
            h.addWidget(b_edit)
            h.addWidget(b_del)
            self.trn_table.setCellWidget(i, 4, w)

    def add_trainer(self) -> None:
        if TrainerDialog(self.trainer_store, parent=self).exec() == QtWidgets.QDialog.Accepted:
            self.load_trainers()

    def edit_trainer(self, trainer: Trainer) -> None:
        if TrainerDialog(self.trainer_store, trainer, parent=self).exec() == QtWidgets.QDialog.Accepted:
            self.load_trainers()

    def remove_trainer(self, trainer: Trainer) -> None:
        if QtWidgets.QMessageBox.question(
            self, "Delete Trainer?", f"Are you sure you want to delete {trainer.name}?",
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
        ) != QtWidgets.QMessageBox.Yes:
            return

        try:
            delete_trainer(self.trainer_store, trainer)
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
        self.load_trainers()

    # --- SHARED ---
    def _avatar(self, photo: Optional[str], size: int) -> QtWidgets.QLabel:
        lbl = QtWidgets.QLabel()
        lbl.setFixedSize(size, size)
        lbl.setAlignment(QtCore.Qt.AlignCenter)
        path = photo_full_path(photo)
        pm = circle_pixmap(str(path), size) if path else None
        if pm:
            lbl.setPixmap(pm)
        else:
            lbl.setStyleSheet(f"background:#444;border-radius:{size // 2}px")
        return lbl

    def logout(self) -> None:
        try:
            sign_out()
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Logout Failed", e.message)
            return
        self.logout_signal.emit()

    def apply_style(self) -> None:
        self.setStyleSheet("""
            QMainWindow{background:#0c0c0c;color:white}
            QLabel{color:white;font-size:14px}
            QLineEdit,QComboBox,QTextEdit{padding:8px;background:#222;color:white;border:1px solid #444}
            QPushButton{background:#333;color:white;padding:8px}
            QPushButton:hover{background:#ffd400;color:black}
            QTableWidget{background:#151515;color:white}
        """)
